from enum import Enum


class Gender(str, Enum):
    """Gender recorded on customer details."""

    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"
