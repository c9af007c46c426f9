"""Page extraction routines for the RERA Karnataka project portal.

Each routine drives one session through a fixed sequence of cached actions
and structured-extraction calls. The only branching is the bounded retry
around tab-readiness markers.
"""

from typing import Any, Awaitable, Callable, Dict

from .config import DOWNLOAD_URL_PREFIX, Settings
from .logging_utils import TargetLogger
from .reconcile import reconcile
from .retry import RecoverableStep
from .schemas import (
    ComplaintsExtraction,
    DocumentLinksExtraction,
    DocumentsExtraction,
    LandDetailsExtraction,
    ProjectDetailsExtraction,
)

Act = Callable[[str], Awaitable[None]]

VIEW_DETAILS_INSTRUCTION = "Click the view project details icon button"

PROJECT_DETAILS_INSTRUCTION = """Extract these project details, use "not available" if not found:
    - Project Name (Tab field name)
    - Project Description
    - Project Type
    - Project Sub Type
    - Project Address
    - Project Land Area (Total Area Of Land (Sq Mtr) (A1+A2))
    - Project Covered Area (Total Coverd Area (Sq Mtr) (A2))
    - Project Authority (Approving Authority)
    - Project Names (combine contractor names with commas)
    - FAR Sanctioned

    Also extract all registration/extension entries. For each entry include:
    - name (Registration/Extensions)
    - startDate
    - completionDate
    """

COMPLAINTS_INSTRUCTION = """Extract all complaints, for each complaint include:
    - complaintDate (Date of Complaint)
    - complaintSubject (Subject of Complaint)"""

LAND_FIELDS = (
    "Survey Number",
    "Type of Land",
    "Tenure of Land",
    "No. of Land Owners",
    "Extent of Land",
    "Guidance Value",
    "RTC (Annexure-43)",
    "Mutation (Annexure-44)",
    "Encumbrance Certificate (Annexure-46)",
    "Is Conversion/Alienation Done?",
    "Conversion/Alienation Order Number",
    "Conversion/Alienation Date",
    "Conversion/Alienation Authority",
    "Conversion/Alienation Type",
    "Conversion/Alienation Order (Annexure-40)",
    "Extent of Land as per Conversion/Alienation",
    "Is Sale/Title/Gift Deed Executed?",
    "Sale Deed Number",
    "Deed Execution Date",
    "Sub Registrar Office (for Deed)",
    "Sale/Title/Gift Deed (Annexure-41)",
    "Extent of Land as per Deed",
    "Deed Executed From",
    "Deed Executed To",
    "Is JDA Registered?",
    "JDA Registered Date",
    "Sub Registrar Office (for JDA)",
    "JDA (Annexure-42)",
    "Extent of Land as per JDA",
    "Khatha Number",
    "Khatha Date",
    "Khatha Issuing Authority",
    "Type of Khatha",
    "Extent of Land as per Khatha",
    "Khatha (Annexure-45)",
    "Land Owner Name",
    "Land Owner Share",
    "Present Address",
    "Communication Address",
)

LAND_DETAILS_INSTRUCTION = """
    For each survey number, extract all the fields listed below as separate entries.
    Each entry should have:
    - The survey number it belongs to
    - The field name
    - The field value

    If a field value is not present, use "not available".

    Field list for extraction:
""" + "\n".join(f"    - {name}" for name in LAND_FIELDS)

DOCUMENT_CATEGORIES = (
    "Financial Documents",
    "Project Documents",
    "Declarations",
    "NOC Documents",
    "Project Photo",
    "Other Documents",
)

DOCUMENTS_INSTRUCTION = """
    Extract document information from each category section. Focus on metadata only, not URLs.

    Each document entry should have:
    - category (section name like "Financial Documents", "Project Documents", etc.)
    - documentName (e.g. "Balance Sheet", "Commencement Certificate")
    - annexureNumber (number from "Annexure - XX", find the specific number for each document)
    - fileName (PDF filename or "Not Available.pdf")

    Categories to check:
""" + "\n".join(f"    - {name}" for name in DOCUMENT_CATEGORIES)

DOCUMENT_LINKS_INSTRUCTION = f"""
    Extract all document download links.
    For each link, provide:
    - text: The visible text or filename associated with the link
    - url: The full download URL from href attribute

    Look for elements with href containing "/download_jc?DOC_ID="
    For each match, construct the full URL as "{DOWNLOAD_URL_PREFIX}<id>"
    """


async def _open_search_result(session, act: Act, settings: Settings, search_instruction: str,
                              view_instruction: str) -> None:
    await session.navigate(settings.portal_url, settings.navigation_timeout_ms)
    await act(search_instruction)
    await act("Press the down arrow key")
    await act("Click the search button")
    await session.wait_for_network_idle()
    await act(view_instruction)
    await session.wait_for_network_idle()


def _tab_ready_step(session, act: Act, settings: Settings, marker: str, recover_instruction: str,
                    settle: bool) -> RecoverableStep:
    """Wait for ``marker``; on timeout re-run ``recover_instruction`` once."""

    async def check() -> None:
        await session.wait_for_selector_text(marker, settings.tab_ready_timeout_ms)

    async def recover() -> None:
        await act(recover_instruction)
        if settle:
            await session.wait_for_network_idle()

    return RecoverableStep(name=f"wait for {marker!r}", check=check, recover=recover)


# Registration-number flow: project details + complaints.

async def extract_project_details_data(session, act: Act, settings: Settings,
                                       logger: TargetLogger) -> Dict[str, Any]:
    await session.wait_for_selector_text("Project Details", settings.tab_ready_timeout_ms)
    await act("Go to Project Details tab")

    extraction = await session.extract_structured(PROJECT_DETAILS_INSTRUCTION, ProjectDetailsExtraction)
    details = extraction.project_details.to_json_dict()
    logger.info("Extracted project details: %s", details.get("projectName"))
    logger.debug("Project details: %s", details)
    return details


async def extract_complaints(session, act: Act, settings: Settings, logger: TargetLogger):
    await act("Go to Complaints tab")
    await _tab_ready_step(
        session, act, settings, "Complaints On this Project", "Go to Complaints tab", settle=False
    ).run(logger)
    await act("In complaints tab, click on Complaints On this Project")

    extraction = await session.extract_structured(COMPLAINTS_INSTRUCTION, ComplaintsExtraction)
    complaints = [c.to_json_dict() for c in extraction.complaints]
    logger.info("Extracted %d complaints", len(complaints))
    logger.debug("Complaints: %s", complaints)
    return complaints


async def extract_project_details_for(session, act: Act, registration_no: str, settings: Settings,
                                      logger: TargetLogger) -> Dict[str, Any]:
    """Search by registration number and return ``{projectDetails, complaints}``."""
    await _open_search_result(
        session, act, settings,
        f"Enter text '{registration_no}' in the \"Registration No\" input field",
        "Click the View Project Details icon button",
    )
    await session.wait(settings.detail_settle_ms)

    project_details = await extract_project_details_data(
        session, act, settings, logger.for_step("project_details")
    )
    complaints = await extract_complaints(session, act, settings, logger.for_step("complaints"))
    return {"projectDetails": project_details, "complaints": complaints}


# Project-name flow: land details + uploaded documents.

async def extract_land_details(session, act: Act, settings: Settings, logger: TargetLogger):
    await _tab_ready_step(
        session, act, settings, "Land Details", VIEW_DETAILS_INSTRUCTION, settle=True
    ).run(logger)
    await act("Click the Land Details tab")
    await act("Make sure you are on the Land Details tab")

    extraction = await session.extract_structured(LAND_DETAILS_INSTRUCTION, LandDetailsExtraction)
    land_details = [d.to_json_dict() for d in extraction.land_details]
    logger.info("Extracted %d land detail entries", len(land_details))
    logger.debug("Land details: %s", land_details)
    return land_details


async def extract_documents(session, act: Act, settings: Settings, logger: TargetLogger):
    await _tab_ready_step(
        session, act, settings, "Uploaded Documents", VIEW_DETAILS_INSTRUCTION, settle=True
    ).run(logger)
    await act("Click the Uploaded Documents tab")
    await act("Make sure you are on the Uploaded Documents tab")

    # Metadata and links are independent passes over the same tab.
    documents = await session.extract_structured(DOCUMENTS_INSTRUCTION, DocumentsExtraction)
    links = await session.extract_structured(
        DOCUMENT_LINKS_INSTRUCTION, DocumentLinksExtraction, use_text_extract=False
    )
    logger.info("Extracted %d documents and %d links", len(documents.documents), len(links.links))
    logger.debug("Document links: %s", [link.to_json_dict() for link in links.links])

    resolved = [d.to_json_dict() for d in reconcile(documents.documents, links.links)]
    logger.debug("Documents: %s", resolved)
    return resolved


async def extract_land_and_documents_for(session, act: Act, project_name: str, settings: Settings,
                                         logger: TargetLogger) -> Dict[str, Any]:
    """Search by project name and return ``{landDetails, documents}``."""
    await _open_search_result(
        session, act, settings,
        f"Enter text '{project_name}' in the project name input field",
        VIEW_DETAILS_INSTRUCTION,
    )
    land_details = await extract_land_details(session, act, settings, logger.for_step("land_details"))
    documents = await extract_documents(session, act, settings, logger.for_step("documents"))
    return {"landDetails": land_details, "documents": documents}
