"""Prompt templates for every generation step.

Templates are plain ``str.format`` strings. Facet templates take only
``{item}``; the scenario template takes ``{topic}``, ``{count}``,
``{items_min}`` and ``{items_max}``. Output shape is enforced by the
response schema, so templates describe content, not JSON.
"""

SCENARIOS_PROMPT = """Imagine a future where AI helps build a more equitable, sustainable, and fulfilling world for everyone, focused on this topic: "{topic}"

Describe {count} detailed and distinct scenarios showing how AI could positively advance humanity within this topic.

Each scenario should explore a different aspect of AI's positive potential and should not overlap significantly with the others. Draw on domains such as:
- Social impact and governance
- Environmental protection and resource management
- Scientific breakthroughs and technological innovation
- Healthcare, well-being, and longevity
- Education, creativity, and self-fulfillment

For each scenario provide:
- title: a short, descriptive title (at most 20 words)
- description: a concise explanation (at most 50 words)
- items: between {items_min} and {items_max} specific steps or events that bring the scenario about
"""

TOPICS_PROMPT = """Generate {count} diverse and interesting topics for positive future outcomes shaped by AI. Each topic should be a brief phrase or sentence."""

ETA_PROMPT = """Consider this step towards a positive AI future: "{item}"

Estimate when this step could realistically be achieved, given current technological trends and likely advancements.

Answer with one concise sentence. Be specific where possible (e.g. "Within the next 5 years", "By the early 2030s", "Likely beyond 2050"). If the timeframe is highly uncertain, say so and explain why."""

ANALOGY_PROMPT = """Consider this step towards a positive AI future: "{item}"

Name a historical event or advancement that had a comparable, significant positive impact on humanity.

Provide:
- event: the name or a brief description of the historical event
- similarity: the key similarities between that event and this step
- lesson: an insight from the event that applies to this step

Prefer analogies that show the upside of technological change while highlighting planning, ethics, and societal adaptation."""

STAKEHOLDERS_PROMPT = """Identify up to 5 key stakeholders who would be significantly affected by this step towards a positive AI future: "{item}"

Consider governments, businesses, individuals, specific communities, and other relevant groups.

For each stakeholder provide a name (or stakeholder type), a role (e.g. Beneficiary, Regulator, Developer), and a brief description of their part in this step."""

INNOVATION_PROMPT = """Consider this step towards a positive AI future: "{item}"

Propose one "moonshot" idea that could significantly enhance or accelerate this step, pushing past what is currently possible.

Provide:
- idea: the innovative idea
- potential: its potential positive impact
- challenges: the obstacles to realizing it"""

FUTURE_TIMELINES_PROMPT = """Consider this step towards a positive AI future: "{item}"

Project three possible timelines for this step:
- optimistic: advancements and adoption happen quickly and smoothly
- pessimistic: progress is slow and challenges arise
- realistic: a balanced view of likely advances and obstacles

Optionally add a wildcard: an event or breakthrough that could significantly alter any of these timelines. Leave it empty if none stands out."""
