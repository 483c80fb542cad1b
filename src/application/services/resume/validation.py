"""
Download Validation
Minimum content a resume needs before it is rendered
"""
from typing import List

from domain.entities import ResumeData


def validate_for_download(data: ResumeData) -> List[str]:
    """Return human-readable problems, empty when the resume can be rendered"""
    errors: List[str] = []

    if data.personal_info.first_name.strip() == "":
        errors.append("First name is required.")

    if data.personal_info.last_name.strip() == "":
        errors.append("Last name is required.")

    if (
        not data.experience
        and not data.education
        and not data.projects
        and not data.technical_skills.has_content()
    ):
        errors.append("Add at least one education, experience, project, or technical skill entry.")

    if any(entry.role.strip() == "" and entry.company.strip() == "" for entry in data.experience):
        errors.append("Each experience entry must include at least role or company.")

    if any(entry.name.strip() == "" for entry in data.projects):
        errors.append("Each project entry must include a project name.")

    return errors
