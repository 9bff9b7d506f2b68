from common.exceptions import InvalidInput


class EmptyProfileUpdateError(InvalidInput):
    default_detail = "No update fields provided."
