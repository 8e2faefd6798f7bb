from .contact_card import CardDetail, ContactCard
from .contact_form import FORM_FIELDS, ContactFormDialog

__all__ = ["FORM_FIELDS", "CardDetail", "ContactCard", "ContactFormDialog"]
