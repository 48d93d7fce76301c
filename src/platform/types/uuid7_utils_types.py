"""
Pydantic integration for uuid_utils.UUID

Reservation and attendance ids are UUID7 values generated with uuid_utils.
uuid_utils.UUID carries no pydantic schema, so response models use
UtilsUUID7 instead:

    class ReservationResponse(BaseModel):
        id: UtilsUUID7

JSON input must be a string, Python input may be a UUID or a string, and
output is always the canonical string form. The OpenAPI schema is a plain
`{"type": "string", "format": "uuid"}`.
"""

from typing import Any
import uuid

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from uuid_utils import UUID


def _to_uuid(value: Any) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError) as e:
        raise ValueError(f'Invalid UUID: {value}') from e


class UtilsUUID7(UUID):
    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        from_str = core_schema.chain_schema(
            [
                core_schema.str_schema(),
                core_schema.no_info_plain_validator_function(_to_uuid),
            ]
        )
        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.union_schema(
                [
                    core_schema.is_instance_schema(UUID),
                    # stdlib uuid.UUID comes back from SQLAlchemy as_uuid columns
                    core_schema.chain_schema(
                        [
                            core_schema.is_instance_schema(uuid.UUID),
                            core_schema.no_info_plain_validator_function(_to_uuid),
                        ]
                    ),
                    from_str,
                ]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str,
                when_used='always',
                return_schema=core_schema.str_schema(),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        # handler(schema) would expand the validator chain into the OpenAPI document
        return {'type': 'string', 'format': 'uuid'}
