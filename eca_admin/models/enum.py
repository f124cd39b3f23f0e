from enum import Enum


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @property
    def is_staff(self) -> bool:
        return self in (UserRole.ADMIN, UserRole.SUPER_ADMIN)


class NewsType(str, Enum):
    GENERAL = "GENERAL"
    EVENEMENT = "EVENEMENT"
    ANNONCE = "ANNONCE"
    ACTUALITE = "ACTUALITE"
    PROGRAMMATION = "PROGRAMMATION"

    @property
    def french_name(self):
        names = {
            NewsType.GENERAL: "Informations générales",
            NewsType.EVENEMENT: "Événement",
            NewsType.ANNONCE: "Annonce",
            NewsType.ACTUALITE: "Actualité",
            NewsType.PROGRAMMATION: "Programmation",
        }
        return names[self]


class DeliveryMethod(str, Enum):
    PICKUP = "retrait"
    POST = "envoi_postal"
    EMAIL = "email"
    DOWNLOAD = "telechargement"
