# product_api/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, Any, Dict, Union

# int and float prices keep the type the client sent; neither accepts strings,
# booleans, infinities or NaN
PositivePrice = Union[
    Annotated[int, Field(strict=True, gt=0)],
    Annotated[float, Field(strict=True, gt=0, allow_inf_nan=False)],
]

class ProductIn(BaseModel):
    """Fields a client supplies on create and full replace."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    category: str
    price: PositivePrice
    in_stock: bool = Field(alias="inStock", strict=True)

class Product(ProductIn):
    id: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "price": self.price,
            "inStock": self.in_stock,
        }
