from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelSchema(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,      # Allows reading from SQLAlchemy objects
        populate_by_name=True,     # Allows truck_number="T1" or truckNumber="T1"
        alias_generator=to_camel,  # Wire format is camelCase for the dashboard
        serialize_by_alias=True,
    )
