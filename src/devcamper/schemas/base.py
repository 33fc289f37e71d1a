from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for resource schemas.

    Attributes are snake_case in Python and lowerCamelCase on the wire; request
    bodies accept either. ``from_attributes`` lets responses validate straight
    from ORM rows.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )
