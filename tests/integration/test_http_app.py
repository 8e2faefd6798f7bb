"""End-to-end tests of the contact pages through the HTTP app."""

import re

from fastapi.testclient import TestClient
from sqlmodel import Session

from src.agenda.entities import ContactRepository, UserRepository

CONTACT_ID = re.compile(r'<article class="card" data-contact-id="([^"]+)"')
HIDDEN_CONTACT_ID = re.compile(r'<article class="card" hidden data-contact-id="([^"]+)"')


def _contact_ids(html: str) -> list[str]:
    return CONTACT_ID.findall(html)


class TestAuthPages:
    def test_anonymous_visitor_is_sent_to_auth(self, client: TestClient):
        response = client.get("/", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/auth"

    def test_auth_page_renders(self, client: TestClient):
        response = client.get("/auth")

        assert response.status_code == 200
        assert "Iniciar sesión" in response.text
        assert 'action="/auth/sign-in"' in response.text

    def test_sign_up_form(self, client: TestClient):
        response = client.get("/auth?mode=sign-up")
        assert 'action="/auth/sign-up"' in response.text

    def test_sign_up_lands_on_empty_list(self, sign_up):
        client = sign_up(full_name="Carla Dueña")

        response = client.get("/")

        assert response.status_code == 200
        assert "Carla Dueña" in response.text
        assert "No tienes contactos aún" in response.text

    def test_header_falls_back_to_email(self, sign_up):
        client = sign_up(email="sin.nombre@example.com")
        assert "sin.nombre@example.com" in client.get("/").text

    def test_signed_in_user_skips_auth_page(self, sign_up):
        client = sign_up()
        response = client.get("/auth", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/"

    def test_wrong_password_shows_error_toast(self, client: TestClient, alice):
        response = client.post(
            "/auth/sign-in", data={"email": "alice@example.com", "password": "nope-nope"}
        )

        assert response.url.path == "/auth"
        assert "Email o contraseña incorrectos" in response.text
        assert "user_session_id" not in client.cookies

    def test_sign_in(self, client: TestClient, alice):
        response = client.post(
            "/auth/sign-in", data={"email": "alice@example.com", "password": "secret123"}
        )

        assert response.url.path == "/"
        assert "Alice Martín" in response.text
        assert "Sesión iniciada" in response.text

    def test_duplicate_sign_up(self, client: TestClient, alice):
        response = client.post(
            "/auth/sign-up", data={"email": "alice@example.com", "password": "secret123"}
        )

        assert response.url.path == "/auth"
        assert "Ya existe una cuenta con ese email" in response.text

    def test_sign_out_redirects_to_auth_with_toast(self, sign_up):
        client = sign_up()

        response = client.post("/auth/sign-out")

        assert response.url.path == "/auth"
        assert "Sesión cerrada" in response.text
        assert client.get("/", follow_redirects=False).status_code == 303

    def test_session_state_endpoint(self, client: TestClient, sign_up):
        assert client.get("/auth/session").json() == {
            "authenticated": False,
            "email": None,
            "csrf_token": None,
        }

        sign_up()
        state = client.get("/auth/session").json()
        assert state["authenticated"] is True
        assert state["email"] == "carla.owner@example.com"
        assert state["csrf_token"]


class TestContactPages:
    def test_create_contact_scenario(self, sign_up, engine):
        client = sign_up()

        response = client.post(
            "/contacts", data={"name": "Carla", "email": "", "phone": "611"}
        )

        assert response.status_code == 200
        assert "Contacto creado" in response.text
        assert "Carla" in response.text
        assert "611" in response.text

        with Session(engine) as session:
            owner = UserRepository(session).get_by_email("carla.owner@example.com")
            [contact] = ContactRepository(session, owner.id).list_for_owner()
        assert contact.email is None
        assert contact.city is None

    def test_toast_is_shown_only_once(self, sign_up):
        client = sign_up()
        client.post("/contacts", data={"name": "Carla"})

        assert "Contacto creado" not in client.get("/").text

    def test_newest_first_and_search(self, sign_up):
        client = sign_up()
        client.post("/contacts", data={"name": "Ana", "email": "ana@x.com", "phone": "600111222"})
        client.post("/contacts", data={"name": "Luis", "phone": "600333444"})

        all_ids = _contact_ids(client.get("/").text)
        assert len(all_ids) == 2

        ana_page = client.get("/", params={"q": "ana"}).text
        assert len(_contact_ids(ana_page)) == 1
        assert "ana@x.com" in ana_page

        assert len(_contact_ids(client.get("/", params={"q": "600"}).text)) == 2

        empty = client.get("/", params={"q": "999"}).text
        assert _contact_ids(empty) == []
        assert '<div id="no-results" class="empty">' in empty

    def test_every_card_is_rendered_for_filtering_while_typing(self, sign_up):
        client = sign_up()
        client.post("/contacts", data={"name": "Ana", "email": "ANA@x.com", "phone": "600111222"})
        client.post("/contacts", data={"name": "Luis", "phone": "600333444"})

        page = client.get("/", params={"q": "ana"}).text

        assert len(_contact_ids(page)) == 1
        assert len(HIDDEN_CONTACT_ID.findall(page)) == 1
        assert 'data-email="ANA@x.com"' in page
        assert 'data-phone="600333444"' in page
        assert '<div id="no-results" class="empty" hidden>' in page
        assert 'id="contact-search"' in page
        assert 'addEventListener("input"' in page

    def test_new_dialog(self, sign_up):
        client = sign_up()
        page = client.get("/", params={"dialog": "new"}).text
        assert 'role="dialog"' in page
        assert 'name="id"' not in page
        assert "Guardar" in page

    def test_edit_dialog_prefills_and_updates(self, sign_up):
        client = sign_up()
        client.post("/contacts", data={"name": "Luis", "phone": "600333444"})
        [contact_id] = _contact_ids(client.get("/").text)

        page = client.get("/", params={"edit": contact_id}).text
        assert f'name="id" value="{contact_id}"' in page
        assert 'value="600333444"' in page
        assert "Actualizar" in page

        response = client.post(
            "/contacts",
            data={"id": contact_id, "name": "Luis", "phone": "600333444", "notes": "Primo"},
        )
        assert "Contacto actualizado" in response.text
        assert "Primo" in response.text
        assert _contact_ids(response.text) == [contact_id]

    def test_search_term_survives_a_save(self, sign_up):
        client = sign_up()
        response = client.post(
            "/contacts", data={"name": "Ana", "q": "an"}, follow_redirects=False
        )
        assert response.headers["location"] == "/?q=an"

    def test_delete(self, sign_up):
        client = sign_up()
        client.post("/contacts", data={"name": "Ana"})
        [contact_id] = _contact_ids(client.get("/").text)

        response = client.post(f"/contacts/{contact_id}/delete")

        assert "Contacto eliminado" in response.text
        assert _contact_ids(response.text) == []

    def test_users_cannot_touch_each_others_contacts(
        self, client: TestClient, alice, add_contact, sign_up
    ):
        foreign = add_contact(alice, "Privado de Alice")
        sign_up()

        assert "Privado de Alice" not in client.get("/").text

        update = client.post("/contacts", data={"id": foreign.id, "name": "Robado"})
        assert "Error al actualizar el contacto" in update.text

        delete = client.post(f"/contacts/{foreign.id}/delete")
        assert "Error al eliminar el contacto" in delete.text

    def test_empty_name_is_rejected(self, sign_up):
        client = sign_up()
        response = client.post("/contacts", data={"name": ""})
        assert "Error al crear el contacto" in response.text
        assert _contact_ids(response.text) == []

    def test_anonymous_post_is_redirected(self, client: TestClient):
        response = client.post("/contacts", data={"name": "X"}, follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/auth"


class TestHealth:
    def test_liveness(self, client: TestClient):
        assert client.get("/health").json()["status"] == "healthy"

    def test_readiness(self, client: TestClient):
        body = client.get("/health/ready").json()
        assert body["status"] == "ready"
        assert body["checks"]["database"]["status"] == "healthy"

    def test_security_headers_and_request_id(self, client: TestClient):
        response = client.get("/health", headers={"X-Request-ID": "req-1"})
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Request-ID"] == "req-1"


def test_pages_declare_their_language(client: TestClient, sign_up):
    assert '<html lang="es">' in client.get("/auth").text
    sign_up()
    assert '<html lang="es">' in client.get("/").text
