"""Pydantic schemas for every structured-extraction call.

Attributes are snake_case; serialized keys are camelCase, matching the JSON
files the scraper writes.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Literal used for fields the page does not show.
NOT_AVAILABLE = "not available"


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class RegistrationExtension(_Record):
    """One row of the "Registration/Extensions" table."""
    name: str
    start_date: str
    completion_date: str


class ProjectDetailsRecord(_Record):
    project_name: str
    project_description: str
    project_type: str
    project_sub_type: str
    project_address: str
    project_land_area: str
    project_covered_area: str
    project_authority: str
    project_names: str
    far_sanctioned: str
    list_of_registrations_extensions: List[RegistrationExtension] = Field(default_factory=list)


class ComplaintRecord(_Record):
    complaint_date: str
    complaint_subject: str


class LandDetailRecord(_Record):
    """One (survey number, field, value) triple.

    Parcels expose different field sets, so land details stay flat here and
    are only pivoted per survey number when written to CSV.
    """
    survey_number: str
    field: str
    value: str


class DocumentRecord(_Record):
    category: str
    document_name: str
    annexure_number: str
    file_name: str
    year: Optional[str] = None
    download_url: Optional[str] = None


class DocumentLinkRecord(_Record):
    """A download link as rendered on the page; not keyed to any document."""
    text: str
    url: str


# Wrappers returned by the extraction calls.

class ProjectDetailsExtraction(_Record):
    project_details: ProjectDetailsRecord


class ComplaintsExtraction(_Record):
    complaints: List[ComplaintRecord] = Field(default_factory=list)


class LandDetailsExtraction(_Record):
    land_details: List[LandDetailRecord] = Field(default_factory=list)


class DocumentsExtraction(_Record):
    documents: List[DocumentRecord] = Field(default_factory=list)


class DocumentLinksExtraction(_Record):
    links: List[DocumentLinkRecord] = Field(default_factory=list)
