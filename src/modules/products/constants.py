"""Field limits shared by the Product model and its DTOs."""

TYPE_MAX_LENGTH = 50
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
PRICE_MAX_DIGITS = 10
PRICE_DECIMAL_PLACES = 2
