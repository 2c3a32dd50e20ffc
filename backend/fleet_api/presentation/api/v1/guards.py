"""Request guards shared by the entity routers: media types and ownership."""

from fastapi import Header, HTTPException, status

from fleet_api.domain.entities import Document
from fleet_api.domain.exceptions import OwnershipError

_JSON_RANGES = {"application/json", "application/*", "*/*"}


def require_json_accept(accept: str | None = Header(None)) -> None:
    """Reject requests whose Accept header rules out JSON."""
    if not accept:
        return
    ranges = {part.split(";")[0].strip().lower() for part in accept.split(",")}
    if ranges.isdisjoint(_JSON_RANGES):
        raise HTTPException(
            status_code=status.HTTP_406_NOT_ACCEPTABLE,
            detail="Requested MIME type is not supported.",
        )


def require_json_body(content_type: str | None = Header(None)) -> None:
    media_type = (content_type or "").split(";")[0].strip().lower()
    if media_type != "application/json":
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Request body contains unsupported MIME type.",
        )


def ensure_owner(subject: str, *documents: Document) -> None:
    """Raise OwnershipError unless ``subject`` owns every document."""
    for document in documents:
        if document.owner != subject:
            raise OwnershipError(document.kind.value, document.id)
