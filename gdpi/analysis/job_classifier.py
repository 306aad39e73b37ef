"""
Job type labeling for quote history entries
"""

from typing import Optional

# First keyword found wins
JOB_TYPES = (
    ('spring', "Torsion springs"),
    ('roller', "Rollers"),
    ('opener', "Opener replacement"),
    ('panel', "Panel swap"),
    ('door', "Door replacement"),
)

GENERAL_SERVICE = "General service"


def extract_job_type(text: Optional[str]) -> str:
    lower = (text or "").lower()
    for keyword, label in JOB_TYPES:
        if keyword in lower:
            return label
    return GENERAL_SERVICE
