from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..core.enums import EntityType


@dataclass(frozen=True)
class FieldSpec:
    """One logical column of an import.

    `synonyms` are normalized header fragments (lowercase letters only), in
    priority order, used by fuzzy header matching.
    `required` means the cell must not be empty; `column_required` means the
    column must exist in fuzzy mode even if its cells may be blank.
    """

    name: str
    label: str
    required: bool = False
    synonyms: Tuple[str, ...] = ()
    column_required: bool = False

    @property
    def must_be_mapped(self) -> bool:
        return self.required or self.column_required


@dataclass(frozen=True)
class EntityFields:
    entity_type: EntityType
    label: str
    # Order matters: fuzzy matching claims columns in this order.
    fields: Tuple[FieldSpec, ...]
    natural_key: Optional[str] = None

    def get(self, name: str) -> FieldSpec:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)

    def label_for(self, name: str) -> str:
        return self.get(name).label

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def required(self) -> Tuple[FieldSpec, ...]:
        return tuple(f for f in self.fields if f.required)


STUDENT_FIELDS = EntityFields(
    entity_type=EntityType.STUDENTS,
    label="Students",
    natural_key="roll_no",
    fields=(
        FieldSpec("name", "Name", required=True, synonyms=("studentname", "fullname", "name")),
        FieldSpec("roll_no", "Roll Number", required=True, synonyms=("rollno", "rollnumber", "roll", "regno")),
        FieldSpec("email", "Email", synonyms=("email", "mail")),
        FieldSpec("department", "Department", required=True, synonyms=("department", "dept", "branch")),
        FieldSpec("year", "Year", required=True, synonyms=("year",)),
        FieldSpec("parent_mobile", "Parent Mobile", synonyms=("parentmobile", "parentphone", "parentcontact", "guardian")),
        FieldSpec("phone_number", "Phone Number", synonyms=("phonenumber", "phone", "mobile", "contact")),
    ),
)

FACULTY_FIELDS = EntityFields(
    entity_type=EntityType.FACULTY,
    label="Faculty",
    natural_key="email",
    fields=(
        FieldSpec("name", "Name", required=True, synonyms=("facultyname", "fullname", "name")),
        FieldSpec("email", "Email", required=True, synonyms=("email", "mail")),
        FieldSpec("department", "Department", required=True, synonyms=("department", "dept", "branch")),
        FieldSpec("phone_number", "Phone Number", synonyms=("phonenumber", "phone", "mobile", "contact")),
        FieldSpec("password", "Password", synonyms=("password",)),
    ),
)

SUBJECT_FIELDS = EntityFields(
    entity_type=EntityType.SUBJECTS,
    label="Subjects",
    natural_key="code",
    fields=(
        FieldSpec("name", "Subject Name", required=True, synonyms=("subjectname", "name", "title")),
        FieldSpec("code", "Subject Code", required=True, synonyms=("subjectcode", "code")),
        FieldSpec("department", "Department", required=True, synonyms=("department", "dept", "branch")),
        FieldSpec("classroom", "Classroom", synonyms=("classroomnumber", "classroom", "room")),
        FieldSpec("year", "Year", required=True, synonyms=("year",)),
    ),
)

TIMETABLE_FIELDS = EntityFields(
    entity_type=EntityType.TIMETABLE,
    label="Timetable",
    fields=(
        FieldSpec("subject", "Subject Name", required=True, synonyms=("subjectname", "subject")),
        FieldSpec("department", "Department", required=True, synonyms=("department", "dept")),
        FieldSpec("classroom", "Classroom Number", column_required=True, synonyms=("classroomnumber", "classroom", "room")),
        FieldSpec("year", "Year", required=True, synonyms=("year", "class")),
        FieldSpec("day", "Day of Week", required=True, synonyms=("dayofweek", "day")),
        FieldSpec("end_time", "End Time", synonyms=("endtime",)),
        FieldSpec("time", "Time", required=True, synonyms=("starttime", "time")),
    ),
)

ENTITY_FIELDS: Dict[EntityType, EntityFields] = {
    EntityType.STUDENTS: STUDENT_FIELDS,
    EntityType.FACULTY: FACULTY_FIELDS,
    EntityType.SUBJECTS: SUBJECT_FIELDS,
    EntityType.TIMETABLE: TIMETABLE_FIELDS,
    EntityType.FACULTY_TIMETABLE: TIMETABLE_FIELDS,
}


def fields_for(entity_type: EntityType) -> EntityFields:
    return ENTITY_FIELDS[EntityType(entity_type)]
