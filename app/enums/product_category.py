from enum import Enum

class ProductCategory(str, Enum):
    ELECTRONICS = "ELECTRONICS"
    FOOD = "FOOD"
    FASHION = "FASHION"
