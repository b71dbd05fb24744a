"""
Form Renderer
=============

Turns a FieldSet into HTML, pulls typed values back out of a submission,
enforces required fields and hands valid submissions to the form.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from flask import render_template

from .fields import CHECKBOX, RADIOS, TEXTAREA

TEMPLATE = 'ethereum_signup/admin_form.html'

# Checkbox values treated as unchecked
_FALSY = ('', '0', 'false', 'off')


@dataclass
class FormResult:
    values: Dict[str, Any]
    errors: Dict[str, str] = field(default_factory=dict)
    submitted: bool = False


class FormRenderer:

    @staticmethod
    def extract_values(fieldset, form_data):
        """Read declared fields from submitted form data. Undeclared keys are dropped"""
        values = {}
        for f in fieldset.iter_fields():
            raw = form_data.get(f.name)
            if f.kind == CHECKBOX:
                values[f.name] = raw is not None and str(raw).strip().lower() not in _FALSY
            elif f.kind == RADIOS:
                # Kept verbatim, the form decides what an unknown choice means
                values[f.name] = raw
            elif f.kind == TEXTAREA:
                # Long texts are signed by users, stored exactly as entered
                values[f.name] = '' if raw is None else str(raw)
            else:
                values[f.name] = '' if raw is None else str(raw).strip()
        return values

    @staticmethod
    def check_required(fieldset, values):
        """Return {field name: message} for each empty required field"""
        errors = {}
        for f in fieldset.iter_fields():
            if not f.required:
                continue
            value = values.get(f.name)
            if value is None or (isinstance(value, str) and not value.strip()):
                errors[f.name] = f"{f.label} field is required."
        return errors

    @classmethod
    def process(cls, form, form_data, fieldset=None):
        """Validate a submission and pass it to form.submit() if it is clean"""
        if fieldset is None:
            fieldset = form.build_fieldset()

        values = cls.extract_values(fieldset, form_data)
        errors = cls.check_required(fieldset, values)
        errors.update(form.validate(values) or {})

        if errors:
            return FormResult(values, errors, submitted=False)

        form.submit(values)
        return FormResult(values, submitted=True)

    @staticmethod
    def render(fieldset, values=None, errors=None, status=200, **context):
        """Render the form, preferring submitted values over stored defaults"""
        current = fieldset.defaults()
        if values:
            current.update(values)

        html = render_template(
            TEMPLATE,
            fieldset=fieldset,
            values=current,
            errors=errors or {},
            **context
        )
        return html, status
