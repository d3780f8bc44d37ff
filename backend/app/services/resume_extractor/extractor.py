"""
Resume metadata extraction using LangGraph.
pdfplumber extracts text, then either the OpenAI LLM (when configured) or the rule-based
heuristics map it to name / major / graduation year / companies / keywords.
"""
from typing import Literal

from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import ChatOpenAI
from langgraph.graph import END, START, StateGraph
from pydantic import BaseModel, Field
from typing_extensions import TypedDict

from backend.app.core.config import settings
from backend.app.core.logging_config import get_logger
from backend.app.schemas.resume import ExtractedMetadata

from .heuristics import extract_fields
from .pdf_utils import extract_text_from_pdf

logger = get_logger("services.resume_extractor")

# Characters of resume text sent to the LLM
_MAX_PROMPT_CHARS = 12000


class ResumeExtractionError(Exception):
    """Raised when no metadata could be extracted from the PDF."""


class ResumeExtractionState(TypedDict):
    """State for the LangGraph resume extraction flow."""
    pdf_bytes: bytes
    fallback_label: str
    resume_text: str
    metadata: ExtractedMetadata | None
    error: str | None


class _ResumeMetadataSchema(BaseModel):
    """Resume metadata for the student resume bank."""
    name: str = Field(default="", description="Candidate full name as written at the top of the resume")
    major: str = Field(default="", description="Primary field of study, e.g. Computer Science")
    graduationYear: str = Field(default="", description="Expected or actual graduation year, four digits")
    companies: list[str] = Field(default_factory=list, description="Employers and internship companies, most recent first")
    keywords: list[str] = Field(default_factory=list, description="Technical skills, tools and languages")


_EXTRACTION_PROMPT = """Extract metadata from the student resume below.

RULES:
1. name: the candidate's full name only, no titles or credentials.
2. major: the degree field of study (e.g. "Computer Science", "Industrial Engineering"). Use the primary major if several are listed.
3. graduationYear: four-digit year of (expected) graduation for the most recent degree.
4. companies: organizations the candidate worked or interned at. Company names only, no job titles or locations.
5. keywords: concrete skills, tools, languages and frameworks. Skip soft skills.
6. Use "" or [] for anything that is not present. Never fabricate.

The file was uploaded as: {fallback_label}

RESUME TEXT:
```
{resume_text}
```"""


def _extract_text_node(state: ResumeExtractionState) -> dict:
    """Node: Extract raw text from the PDF bytes."""
    try:
        text = extract_text_from_pdf(state["pdf_bytes"])
    except Exception as e:
        return {"resume_text": "", "error": f"PDF text extraction failed: {e}"}
    if not text.strip():
        return {"resume_text": "", "error": "No extractable text in PDF"}
    return {"resume_text": text, "error": None}


def _llm_extract_node(state: ResumeExtractionState) -> dict:
    """Node: Use the LLM to map resume text to the metadata schema."""
    try:
        llm = ChatOpenAI(
            model=settings.openai_model,
            api_key=settings.openai_api_key or None,
            temperature=0,
        )
        structured_llm = llm.with_structured_output(_ResumeMetadataSchema, method="function_calling")
        prompt = ChatPromptTemplate.from_messages([
            ("system", "You are a precise resume parser. Return only data present in the resume."),
            ("human", _EXTRACTION_PROMPT),
        ])
        chain = prompt | structured_llm
        result: _ResumeMetadataSchema = chain.invoke({
            "resume_text": state["resume_text"][:_MAX_PROMPT_CHARS],
            "fallback_label": state["fallback_label"],
        })
    except Exception as e:
        return {"metadata": None, "error": f"LLM extraction failed: {e}"}

    metadata = ExtractedMetadata(
        name=result.name or None,
        major=result.major or None,
        graduationYear=result.graduationYear or None,
        companies=result.companies or [],
        keywords=result.keywords or [],
    )
    return {"metadata": metadata, "error": None}


def _heuristic_extract_node(state: ResumeExtractionState) -> dict:
    """Node: Rule-based extraction when no LLM is configured."""
    try:
        metadata = ExtractedMetadata(**extract_fields(state["resume_text"]))
    except Exception as e:
        return {"metadata": None, "error": f"Heuristic extraction failed: {e}"}
    return {"metadata": metadata, "error": None}


def _route_after_extract(state: ResumeExtractionState) -> Literal["llm_extract", "heuristic_extract", "__end__"]:
    """Route: no text ends the graph; otherwise LLM when a key is configured, heuristics if not."""
    if state.get("error") or not state.get("resume_text", "").strip():
        return "__end__"
    if settings.openai_api_key:
        return "llm_extract"
    return "heuristic_extract"


def _build_extraction_graph():
    """Build the LangGraph extraction pipeline."""
    builder = StateGraph(ResumeExtractionState)

    builder.add_node("extract_text", _extract_text_node)
    builder.add_node("llm_extract", _llm_extract_node)
    builder.add_node("heuristic_extract", _heuristic_extract_node)

    builder.add_edge(START, "extract_text")
    builder.add_conditional_edges(
        "extract_text",
        _route_after_extract,
        path_map={
            "llm_extract": "llm_extract",
            "heuristic_extract": "heuristic_extract",
            "__end__": END,
        },
    )
    builder.add_edge("llm_extract", END)
    builder.add_edge("heuristic_extract", END)

    return builder.compile()


_graph = None


def _get_graph():
    global _graph
    if _graph is None:
        _graph = _build_extraction_graph()
    return _graph


def extract_resume_metadata(pdf_bytes: bytes, fallback_label: str) -> ExtractedMetadata:
    """
    Extract resume metadata from PDF bytes.

    Raises ResumeExtractionError when the PDF has no usable text or extraction fails;
    callers decide how to degrade.
    """
    initial_state: ResumeExtractionState = {
        "pdf_bytes": pdf_bytes,
        "fallback_label": fallback_label,
        "resume_text": "",
        "metadata": None,
        "error": None,
    }
    result = _get_graph().invoke(initial_state)

    metadata = result.get("metadata")
    error = result.get("error")
    if error or metadata is None:
        raise ResumeExtractionError(error or "Extraction produced no metadata")

    logger.info(
        "Resume metadata extracted label=%s name_found=%s companies=%d keywords=%d",
        fallback_label,
        bool(metadata.name),
        len(metadata.companies),
        len(metadata.keywords),
    )
    return metadata
