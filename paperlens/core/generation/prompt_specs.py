"""
Prompt specifications for paper artifacts.

Each PromptSpec names one artifact, carries its instruction text and the
shape its output is parsed into. Builders cover summary levels, diagram
types, structured extraction and key-term extraction.

Dependencies: pydantic
System role: Prompt templates for generation orchestration
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from paperlens.core.generation.schemas import CodeSnippet, Insight, Reference


class OutputShape(str, Enum):
    """How a spec's raw output is post-processed."""

    TEXT = "text"
    JSON = "json"
    DIAGRAM = "diagram"


class ModelTier(str, Enum):
    DEFAULT = "default"
    LIGHT = "light"


class PromptSpec(BaseModel):
    """One generation request template."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Artifact name, unique within a batch")
    instruction: str = Field(description="Task instruction placed before the context")
    shape: OutputShape = Field(default=OutputShape.TEXT)
    item_schema: Any = Field(default=None, description="Item type of a JSON array output")
    wrapper_key: str | None = Field(default=None, description="Object key wrapping the JSON array")
    tier: ModelTier = Field(default=ModelTier.DEFAULT)

    @property
    def empty_default(self) -> Any:
        if self.shape is OutputShape.JSON:
            return []
        return ""


FORMAT_RULES = {
    OutputShape.TEXT: "",
    OutputShape.JSON: "Return ONLY valid JSON. Do not add explanations or markdown formatting.",
    OutputShape.DIAGRAM: "Return ONLY the Mermaid syntax without code blocks or explanations.",
}

# Summaries

SUMMARY_LEVELS = ("eli5", "college", "expert")

SUMMARY_PROMPTS = {
    "eli5": (
        "Summarize this research paper for a five-year-old (ELI5). Use simple words, "
        "fun analogies, and make it engaging. Explain complex concepts like you're "
        "talking to a curious child."
    ),
    "college": (
        "Summarize this research paper for a college student. Include key concepts, "
        "methodology, findings, and implications. Use appropriate academic language "
        "while remaining accessible."
    ),
    "expert": (
        "Summarize this research paper for a domain expert. Focus on technical details, "
        "methodology, statistical significance, limitations, and implications for the field."
    ),
}

DEFAULT_SUMMARY_PROMPT = "Provide a comprehensive summary of this research paper."


def summary_spec(level: str | None) -> PromptSpec:
    instruction = SUMMARY_PROMPTS.get(level or "", DEFAULT_SUMMARY_PROMPT)
    return PromptSpec(name=f"summary_{level or 'default'}", instruction=instruction)


def custom_summary_spec(custom_prompt: str) -> PromptSpec:
    return PromptSpec(
        name="summary_custom",
        instruction=f"{custom_prompt}\n\nUse the provided context to enhance your response.",
    )


# Diagrams

DIAGRAM_TYPES = ("flowchart", "mindmap", "timeline")

DIAGRAM_PROMPTS = {
    "flowchart": """Create a valid Mermaid.js flowchart that visualizes the core methodology or workflow described in the research paper.

CRITICAL SYNTAX RULES - FOLLOW EXACTLY:
1. First line: "flowchart TD"
2. Each subsequent line: NodeID[Label] --> NodeID[Label]
3. Node IDs: Only A, B, C, D, E, F (single letters)
4. Labels: Max 12 characters, no parentheses, no special chars
5. Each connection on its own line
6. Maximum 5 nodes total

EXACT FORMAT TO FOLLOW:
flowchart TD
A[Data Input] --> B[Processing]
B[Processing] --> C[Analysis]
C[Analysis] --> D[Results]""",
    "mindmap": """Create a valid Mermaid.js mindmap that shows the key concepts and relationships in the research paper.

CRITICAL SYNTAX RULES - FOLLOW EXACTLY:
1. First line: "mindmap"
2. Second line: "  root((Topic))" (2 spaces, max 8 chars in topic)
3. Third level: "    Branch" (4 spaces, max 8 chars)
4. Fourth level: "      Item" (6 spaces, max 8 chars)
5. Maximum 4 branches, 2 items per branch

EXACT FORMAT TO FOLLOW:
mindmap
  root((Study))
    Methods
      Survey
      Analysis
    Results
      Data
      Insights""",
    "timeline": """Create a valid Mermaid.js timeline that shows the research process or historical development mentioned in the paper.

CRITICAL SYNTAX RULES:
1. Start with exactly "timeline"
2. Title format: title Research Process
3. Entry format: Year : Event Description
4. Keep descriptions short (max 15 characters)
5. Use realistic years or phases

VALID FORMAT:
timeline
    title Research Process
    Phase 1 : Planning
    Phase 2 : Data Collection
    Phase 3 : Analysis
    Phase 4 : Results""",
}

DEFAULT_DIAGRAM_PROMPT = "Create a valid Mermaid.js flowchart that visualizes the core concepts in the research paper."


def diagram_spec(diagram_type: str = "flowchart") -> PromptSpec:
    return PromptSpec(
        name=f"diagram_{diagram_type}",
        instruction=DIAGRAM_PROMPTS.get(diagram_type, DEFAULT_DIAGRAM_PROMPT),
        shape=OutputShape.DIAGRAM,
    )


# Structured extraction

CODE_SNIPPETS_SPEC = PromptSpec(
    name="code_snippets",
    instruction="""Extract and enhance code snippets, algorithms, or technical implementations from the research paper.
Use the provided context to add explanations and improvements.

Return ONLY a JSON object with this structure:
{
  "codeSnippets": [
    {
      "description": "Clear description of what this code does",
      "code": "The actual code or pseudocode",
      "language": "programming language or 'pseudocode'",
      "enhancement": "AI-enhanced explanation or improvement suggestion"
    }
  ]
}

If no code is found, return {"codeSnippets": []}.""",
    shape=OutputShape.JSON,
    item_schema=CodeSnippet,
    wrapper_key="codeSnippets",
)

REFERENCES_SPEC = PromptSpec(
    name="references",
    instruction="""Extract and enhance references, citations, and related work from the research paper.
Use the external context to find additional relevant resources.

Return ONLY a JSON object with this structure:
{
  "references": [
    {
      "title": "Reference title",
      "url": "URL if available, or 'Not available'",
      "description": "Brief description of relevance",
      "type": "journal|conference|book|website|other"
    }
  ]
}

If no references are found, return {"references": []}.""",
    shape=OutputShape.JSON,
    item_schema=Reference,
    wrapper_key="references",
)

INSIGHTS_SPEC = PromptSpec(
    name="insights",
    instruction="""Generate key insights, implications, and future research directions based on the research paper.
Use the provided context to enhance and expand the insights.

Return ONLY a JSON object with this structure:
{
  "insights": [
    {
      "title": "Insight title",
      "description": "Detailed explanation",
      "category": "methodology|findings|implications|future_work|limitations",
      "significance": "high|medium|low"
    }
  ]
}

Generate 5-8 meaningful insights.""",
    shape=OutputShape.JSON,
    item_schema=Insight,
    wrapper_key="insights",
)

KEY_TERMS_SPEC = PromptSpec(
    name="key_terms",
    instruction=(
        "Extract 3-5 key technical terms from this research paper for web search.\n"
        "Return only a JSON array of strings."
    ),
    shape=OutputShape.JSON,
    item_schema=str,
    tier=ModelTier.LIGHT,
)
