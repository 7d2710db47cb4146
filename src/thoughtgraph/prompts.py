GOAL_PLACEHOLDER = "{{goal}}"
INPUT_PLACEHOLDER = "{{input}}"

# Every plain node gets this same prompt; only the wiring differs.
UNIVERSAL_NODE_PROMPT = """You are a single, focused processing unit in a larger AI system. Your task is to perform a specific, small step in a thought process.

**Overall User Goal:**
{{goal}}

**Your Input:**
{{input}}

**Your Instructions:**
- **If 'Your Input' is EMPTY:** You are the FIRST step. Provide a concise, foundational piece of information or a starting point to address the user's goal. Do NOT attempt to answer the whole query. Your output should be a single idea, fact, or concept.
- **If 'Your Input' is NOT EMPTY:** You are a subsequent step. Your only job is to build directly upon the text provided in 'Your Input'. You can expand, critique, simplify, or rephrase it. Do not introduce completely new topics. Your output must be a logical continuation of the input.

Generate only the text for your step. Be brief."""


def render_prompt(template: str, goal: str, input_text: str) -> str:
    return template.replace(GOAL_PLACEHOLDER, goal).replace(INPUT_PLACEHOLDER, input_text)
