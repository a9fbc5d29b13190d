from enum import StrEnum


class UserRole(StrEnum):
    BUYER = 'buyer'
    ORGANIZER = 'organizer'
