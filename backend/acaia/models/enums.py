"""
String enumerations stored in the database
"""


class StaffRole:
    ADMIN = "Admin"
    MANAGER = "Manager"
    SERVER = "Server"
    BARTENDER = "Bartender"
    CASHIER = "Cashier"
    DJ = "DJ"

    ALL = (ADMIN, MANAGER, SERVER, BARTENDER, CASHIER, DJ)


class ClientStatus:
    NEW = "new"
    RETURNING = "returning"
    REGULAR = "regular"
    VIP = "vip"

    ALL = (NEW, RETURNING, REGULAR, VIP)


class VisitStatus:
    OPEN = "open"
    CLOSED = "closed"

    ALL = (OPEN, CLOSED)


class SeatingAreaType:
    TABLE = "TABLE"
    BAR_SEAT = "BAR_SEAT"
    LOUNGE_SEAT = "LOUNGE_SEAT"
    DJ_BOOTH = "DJ_BOOTH"

    ALL = (TABLE, BAR_SEAT, LOUNGE_SEAT, DJ_BOOTH)


class ProductType:
    DRINK = "DRINK"
    FOOD = "FOOD"
    HOOKAH = "HOOKAH"
    OTHER = "OTHER"

    ALL = (DRINK, FOOD, HOOKAH, OTHER)


class UnitOfMeasure:
    ML = "ml"
    G = "g"
    UNIT = "unit"

    ALL = (ML, G, UNIT)


class StockMovementType:
    SALE = "sale"
    PURCHASE = "purchase"
    ADJUSTMENT = "adjustment"
    WASTE = "waste"

    ALL = (SALE, PURCHASE, ADJUSTMENT, WASTE)
    MANUAL = (PURCHASE, ADJUSTMENT, WASTE)
