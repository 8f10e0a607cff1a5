"""Base model shared by every schema."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model whose fields are read and written under camelCase names.

    Python code uses ``first_name`` while request bodies, responses and
    stored documents use ``firstName``.  Unknown fields are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )

    def to_document(self, partial: bool = False) -> dict:
        """Return the fields as a document ready for the store.

        With ``partial`` only fields present in the request are
        included, which gives update requests merge semantics.
        """
        return self.model_dump(by_alias=True, exclude_unset=partial)
