"""Downloadable sample files, one per entity type.

The subject and timetable samples describe the same subjects, so importing the
subject sample first lets the timetable sample import without errors.
"""
from __future__ import annotations

from typing import Dict, List

from ..core.enums import EntityType

_SAMPLES: Dict[EntityType, List[str]] = {
    EntityType.STUDENTS: [
        "Name,Email,RollNo,Department,Year,PhoneNumber,ParentMobile",
        "John Doe,john.doe@student.com,2023001,Computer Science,1st Year,9876543210,9876543211",
        "Jane Smith,jane.smith@student.com,2023002,AIML,2nd Year,9876543211,9876543212",
    ],
    EntityType.FACULTY: [
        "Name,Email,Department,PhoneNumber",
        "Dr. John Smith,john.smith@college.edu,Computer Science,9876543210",
        "Dr. Jane Doe,jane.doe@college.edu,AIML,9876543211",
    ],
    EntityType.SUBJECTS: [
        "Name,Code,Department,Year",
        "Mathematics,MATH101,AIML,1st Year",
        "Physics,PHY201,Computer Science,2nd Year",
        "Chemistry,CHEM101,AIML,1st Year",
    ],
    EntityType.TIMETABLE: [
        "SubjectName,Department,Year,DayOfWeek,Time,ClassroomNumber",
        "Mathematics,AIML,1st Year,Monday,09:00,Room 101",
        "Physics,Computer Science,2nd Year,Tuesday,10:30,Lab A",
        "Chemistry,AIML,1st Year,Wednesday,14:00,Room 205",
    ],
}
_SAMPLES[EntityType.FACULTY_TIMETABLE] = _SAMPLES[EntityType.TIMETABLE]


def sample_csv(entity_type: EntityType) -> str:
    return "\n".join(_SAMPLES[EntityType(entity_type)]) + "\n"


def sample_filename(entity_type: EntityType) -> str:
    return f"sample-{EntityType(entity_type).value}.csv"
