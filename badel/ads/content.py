"""Category-dependent ad content.

Job ads carry job type/experience; every other category carries an optional
free-form sub-category. ``content_fields`` normalises incoming data so only the
fields of the selected variant survive.
"""
from dataclasses import dataclass
from typing import Optional, Union

JOBS = "jobs"


@dataclass(frozen=True)
class GenericContent:
    category: str
    sub_category: Optional[str] = None


@dataclass(frozen=True)
class JobContent:
    job_type: Optional[str] = None
    job_experience: Optional[str] = None

    category = JOBS
    sub_category = None


AdContent = Union[GenericContent, JobContent]


def build_content(category, sub_category=None, job_type=None, job_experience=None) -> AdContent:
    if category == JOBS:
        return JobContent(job_type=job_type or None, job_experience=job_experience or None)
    return GenericContent(category=category, sub_category=sub_category or None)


def content_fields(content: AdContent) -> dict:
    """Flatten a content variant back into model field values."""
    if isinstance(content, JobContent):
        return {
            "category": JOBS,
            "sub_category": None,
            "job_type": content.job_type,
            "job_experience": content.job_experience,
        }
    return {
        "category": content.category,
        "sub_category": content.sub_category,
        "job_type": None,
        "job_experience": None,
    }
