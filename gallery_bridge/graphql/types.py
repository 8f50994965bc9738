"""Strawberry GraphQL types shared by every generated schema."""

import strawberry


@strawberry.type(name="Attachment")
class AttachmentType:
    """An image attachment referenced by a gallery field."""

    id: int


def attachment_to_type(attachment_id: int) -> AttachmentType:
    return AttachmentType(id=attachment_id)
