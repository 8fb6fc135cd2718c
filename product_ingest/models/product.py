from pydantic import BaseModel, Field, ConfigDict, ValidationError, model_validator
from typing import Any, Dict, Optional
from datetime import datetime, timezone


class ProductRecord(BaseModel):
    """
    A product as posted by clients and stored in the products table.

    Field aliases are the JSON wire names. Timestamp and ETag are owned by
    the table store: they are accepted on input but never written.
    """

    partition_key: str = Field(alias="PartitionKey")  # Grouping key, e.g. a category
    row_key: str = Field(alias="RowKey")  # Unique within the partition
    timestamp: Optional[datetime] = Field(default=None, alias="Timestamp")
    etag: Optional[str] = Field(default=None, alias="ETag")  # Concurrency token

    name: str = Field(alias="Name")
    description: Optional[str] = Field(default=None, alias="ProductDescription")
    price: float = Field(default=0.0, alias="Price")
    category: Optional[str] = Field(default=None, alias="Category")
    image_url_path: Optional[str] = Field(default=None, alias="ImageUrlPath")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def match_wire_names_ignoring_case(cls, data: Any) -> Any:
        """Accept wire names in any case, e.g. partitionKey or ROWKEY."""
        if not isinstance(data, dict):
            return data
        aliases = {field.alias.lower(): field.alias for field in cls.model_fields.values()}
        matched = {}
        for key, value in data.items():
            alias = aliases.get(key.lower()) if isinstance(key, str) else None
            if alias is None or alias == key:
                matched[key] = value
            elif alias not in data:
                matched[alias] = value
        return matched

    def to_entity(self) -> Dict[str, Any]:
        """
        Build the item written to the store.

        The row key doubles as the item id so that the store rejects a
        second insert with the same partition and row key.
        """
        data = self.model_dump(by_alias=True, exclude={"timestamp", "etag"})
        data["id"] = self.row_key
        return data

    @classmethod
    def from_entity(cls, item: Dict[str, Any]) -> "ProductRecord":
        """Map a stored item, including its _ts and _etag system fields."""
        data = dict(item)
        if "_ts" in data and "Timestamp" not in data:
            data["Timestamp"] = datetime.fromtimestamp(data["_ts"], tz=timezone.utc)
        if "_etag" in data and "ETag" not in data:
            data["ETag"] = data["_etag"]
        return cls.model_validate(data)


def decode_product(text: str) -> Optional[ProductRecord]:
    """
    Decode a request body into a ProductRecord.

    Empty text, a literal null, malformed JSON and objects that do not fit
    the record shape all come back as None.
    """
    if not text or not text.strip():
        return None
    try:
        return ProductRecord.model_validate_json(text)
    except ValidationError:
        return None
