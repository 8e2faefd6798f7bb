"""User-facing message catalog."""

from src.agenda.runtime.context import get_config

MESSAGES: dict[str, dict[str, str]] = {
    "es": {
        "contacts.load_error": "Error al cargar contactos",
        "contacts.created": "Contacto creado",
        "contacts.create_error": "Error al crear el contacto",
        "contacts.updated": "Contacto actualizado",
        "contacts.update_error": "Error al actualizar el contacto",
        "contacts.deleted": "Contacto eliminado",
        "contacts.delete_error": "Error al eliminar el contacto",
        "contacts.search_placeholder": "Buscar contactos...",
        "contacts.new": "Nuevo Contacto",
        "contacts.empty": "No tienes contactos aún",
        "contacts.no_results": "No se encontraron contactos",
        "contacts.add_first": "Agregar tu primer contacto",
        "dialog.edit_title": "Editar Contacto",
        "dialog.new_title": "Nuevo Contacto",
        "dialog.edit_description": "Actualiza la información del contacto",
        "dialog.new_description": "Agrega un nuevo contacto a tu agenda",
        "dialog.name": "Nombre *",
        "dialog.name_placeholder": "Nombre completo",
        "dialog.email": "Email",
        "dialog.email_placeholder": "correo@ejemplo.com",
        "dialog.phone": "Teléfono",
        "dialog.phone_placeholder": "+34 600 000 000",
        "dialog.address": "Dirección",
        "dialog.address_placeholder": "Calle, número, ciudad, código postal",
        "dialog.notes": "Notas",
        "dialog.notes_placeholder": "Información adicional...",
        "dialog.cancel": "Cancelar",
        "dialog.update": "Actualizar",
        "dialog.save": "Guardar",
        "auth.signed_out": "Sesión cerrada",
        "auth.signed_in": "Sesión iniciada",
        "auth.invalid_credentials": "Email o contraseña incorrectos",
        "auth.email_taken": "Ya existe una cuenta con ese email",
        "auth.weak_password": "La contraseña es demasiado corta",
        "auth.sign_up_error": "Error al crear la cuenta",
        "auth.title": "Accede a tu agenda",
        "auth.sign_in": "Iniciar sesión",
        "auth.sign_up": "Crear cuenta",
        "auth.email": "Email",
        "auth.password": "Contraseña",
        "auth.full_name": "Nombre completo",
        "auth.sign_out": "Cerrar sesión",
    },
    "en": {
        "contacts.load_error": "Could not load contacts",
        "contacts.created": "Contact created",
        "contacts.create_error": "Could not create the contact",
        "contacts.updated": "Contact updated",
        "contacts.update_error": "Could not update the contact",
        "contacts.deleted": "Contact deleted",
        "contacts.delete_error": "Could not delete the contact",
        "contacts.search_placeholder": "Search contacts...",
        "contacts.new": "New Contact",
        "contacts.empty": "You have no contacts yet",
        "contacts.no_results": "No contacts found",
        "contacts.add_first": "Add your first contact",
        "dialog.edit_title": "Edit Contact",
        "dialog.new_title": "New Contact",
        "dialog.edit_description": "Update the contact's details",
        "dialog.new_description": "Add a new contact to your address book",
        "dialog.name": "Name *",
        "dialog.name_placeholder": "Full name",
        "dialog.email": "Email",
        "dialog.email_placeholder": "mail@example.com",
        "dialog.phone": "Phone",
        "dialog.phone_placeholder": "+34 600 000 000",
        "dialog.address": "Address",
        "dialog.address_placeholder": "Street, number, city, postcode",
        "dialog.notes": "Notes",
        "dialog.notes_placeholder": "Additional information...",
        "dialog.cancel": "Cancel",
        "dialog.update": "Update",
        "dialog.save": "Save",
        "auth.signed_out": "Signed out",
        "auth.signed_in": "Signed in",
        "auth.invalid_credentials": "Wrong email or password",
        "auth.email_taken": "An account with that email already exists",
        "auth.weak_password": "The password is too short",
        "auth.sign_up_error": "Could not create the account",
        "auth.title": "Sign in to your address book",
        "auth.sign_in": "Sign in",
        "auth.sign_up": "Create account",
        "auth.email": "Email",
        "auth.password": "Password",
        "auth.full_name": "Full name",
        "auth.sign_out": "Sign out",
    },
}


def t(key: str, locale: str | None = None) -> str:
    """Translate a message key, falling back to the key itself."""
    catalog = MESSAGES.get(locale or get_config().app.locale, MESSAGES["es"])
    return catalog.get(key, key)
