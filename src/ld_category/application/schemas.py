"""Pydantic schema for the persisted category collection (`{namespace}_categories`)."""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from src.ld_category.domain.models import CategoryRecord


class CategoryRecordSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    name: str
    description: str = ""
    product_count: int = Field(0, alias="productCount")

    def to_domain(self) -> CategoryRecord:
        return CategoryRecord(
            id=self.id,
            name=self.name,
            description=self.description,
            product_count=self.product_count,
        )

    @classmethod
    def from_domain(cls, record: CategoryRecord) -> "CategoryRecordSchema":
        return cls(
            id=record.id,
            name=record.name,
            description=record.description,
            product_count=record.product_count,
        )


CATEGORIES_ADAPTER: TypeAdapter[list[CategoryRecordSchema]] = TypeAdapter(
    list[CategoryRecordSchema]
)
