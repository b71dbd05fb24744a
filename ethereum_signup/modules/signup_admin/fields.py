"""
Form Field Model
================

Declarative description of a settings form: a FieldSet holds ordered
Sections, each holding ordered Fields. The renderer turns it into HTML
and uses it to pull typed values back out of a submission.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

CHECKBOX = 'checkbox'
RADIOS = 'radios'
SELECT = 'select'
TEXTFIELD = 'textfield'
TEXTAREA = 'textarea'

FIELD_KINDS = (CHECKBOX, RADIOS, SELECT, TEXTFIELD, TEXTAREA)


@dataclass
class Field:
    name: str
    kind: str
    label: str
    default: Any = None
    required: bool = False
    description: Optional[str] = None
    options: Dict[str, str] = field(default_factory=dict)
    # Value submitted when a select is left on "- None -"
    empty_value: Optional[str] = None

    def __post_init__(self):
        if self.kind not in FIELD_KINDS:
            raise ValueError(f"Unknown field kind: {self.kind}")


@dataclass
class Section:
    key: str
    title: str
    fields: List[Field] = field(default_factory=list)
    open: bool = True


@dataclass
class FieldSet:
    form_id: str
    sections: List[Section] = field(default_factory=list)

    def iter_fields(self) -> Iterator[Field]:
        for section in self.sections:
            yield from section.fields

    def get(self, name: str) -> Optional[Field]:
        return next((f for f in self.iter_fields() if f.name == name), None)

    def names(self) -> List[str]:
        return [f.name for f in self.iter_fields()]

    def defaults(self) -> Dict[str, Any]:
        return {f.name: f.default for f in self.iter_fields()}
