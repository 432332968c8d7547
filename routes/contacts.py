"""Contacts blueprint."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from werkzeug.exceptions import NotFound

from models import db, utcnow
from models.contact import Contact
from utils.current_user import require_admin, require_user
from utils.request_validation import is_valid_email, parse_json_request, raise_for_errors

contacts_bp = Blueprint("contacts", __name__)

CONTACT_FIELDS = ("name", "email", "phone", "address", "whatsapp")


def _get_contact_or_404(contact_id: int) -> Contact:
    contact = db.session.get(Contact, contact_id)
    if contact is None:
        raise NotFound(f"Contact with ID {contact_id} not found")
    return contact


def _validate_contact_payload(data: dict, partial: bool = False) -> list[str]:
    errors = []
    for field in CONTACT_FIELDS:
        value = data.get(field)
        if value is None:
            if not partial:
                errors.append(f"{field} is required")
            continue
        if not isinstance(value, str) or not value.strip():
            errors.append(f"{field} must be a non-empty string")
        elif field == "email" and not is_valid_email(value.strip()):
            errors.append("email must be a valid email address")
    return errors


@contacts_bp.route("", methods=["GET"])
@jwt_required()
def list_contacts():
    require_user()
    contacts = Contact.query.order_by(Contact.name.asc()).all()
    return jsonify([contact.to_dict() for contact in contacts])


@contacts_bp.route("/<int:contact_id>", methods=["GET"])
@jwt_required()
def get_contact(contact_id: int):
    require_user()
    return jsonify(_get_contact_or_404(contact_id).to_dict())


@contacts_bp.route("", methods=["POST"])
@jwt_required()
def create_contact():
    require_admin()
    data = parse_json_request(request)
    raise_for_errors(_validate_contact_payload(data))

    contact = Contact(**{field: data[field].strip() for field in CONTACT_FIELDS})
    db.session.add(contact)
    db.session.commit()
    return jsonify(contact.to_dict()), 201


@contacts_bp.route("/<int:contact_id>", methods=["PATCH"])
@jwt_required()
def update_contact(contact_id: int):
    require_admin()
    contact = _get_contact_or_404(contact_id)
    data = parse_json_request(request)
    raise_for_errors(_validate_contact_payload(data, partial=True))

    for field in CONTACT_FIELDS:
        if data.get(field) is not None:
            setattr(contact, field, data[field].strip())
    contact.updated_at = utcnow()

    db.session.commit()
    return jsonify(contact.to_dict())


@contacts_bp.route("/<int:contact_id>", methods=["DELETE"])
@jwt_required()
def delete_contact(contact_id: int):
    require_admin()
    contact = _get_contact_or_404(contact_id)
    db.session.delete(contact)
    db.session.commit()
    return jsonify({"message": "Contact deleted successfully."})
