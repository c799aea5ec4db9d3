from student_records.routers.ui import br_date, mime_label

from .helpers import make_student, upload


def test_dashboard_requires_login(client):
    response = client.get("/", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_ui_actions_require_login(client):
    response = client.post(
        "/ui/students",
        data={"student_code": "1", "full_name": "Ana", "birth_date": "2010-05-01"},
        follow_redirects=False
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/login"
    assert client.get("/api/students").json() == []


def test_login_with_wrong_credentials(client):
    response = client.post("/login", data={"email": "x@y.com", "password": "nope"})
    assert response.status_code == 401
    assert "Credenciais inválidas. Tente novamente." in response.text
    assert client.get("/", follow_redirects=False).status_code == 303


def test_login_and_logout(logged_in_client):
    page = logged_in_client.get("/")
    assert page.status_code == 200
    assert "Nenhum aluno encontrado" in page.text

    assert logged_in_client.get("/login", follow_redirects=False).headers["location"] == "/"

    logged_in_client.post("/logout")
    assert logged_in_client.get("/", follow_redirects=False).status_code == 303


def test_dashboard_lists_and_filters(logged_in_client):
    make_student(logged_in_client, code="2024001", name="Ana Silva", birth="2010-05-01")
    make_student(logged_in_client, code="2024002", name="Bruno Lima")

    page = logged_in_client.get("/")
    assert "Ana Silva" in page.text and "Bruno Lima" in page.text
    assert "01/05/2010" in page.text

    page = logged_in_client.get("/", params={"q": "BRUNO"})
    assert "Bruno Lima" in page.text
    assert "Ana Silva" not in page.text


def test_create_student_from_form(logged_in_client):
    response = logged_in_client.post(
        "/ui/students",
        data={"student_code": "2024001", "full_name": "Ana Silva", "birth_date": "2010-05-01"},
        follow_redirects=False
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/"

    assert [s["full_name"] for s in logged_in_client.get("/api/students").json()] == ["Ana Silva"]


def test_rejected_form_reopens_modal_with_message(logged_in_client):
    make_student(logged_in_client, code="2024001", name="Ana Silva")

    page = logged_in_client.post(
        "/ui/students",
        data={"student_code": "2024001", "full_name": "Outra Pessoa", "birth_date": "2011-01-01"}
    )
    assert page.status_code == 200
    assert "Código de aluno já cadastrado" in page.text
    assert 'value="Outra Pessoa"' in page.text
    assert "Confirmar Cadastro" in page.text

    # message is shown once
    assert "Código de aluno já cadastrado" not in logged_in_client.get("/", params={"modal": "new"}).text


def test_edit_student_from_form(logged_in_client):
    ana = make_student(logged_in_client)

    page = logged_in_client.get("/", params={"modal": "edit", "edit": ana["id"]})
    assert "Editar Aluno" in page.text
    assert 'value="2010-05-01"' in page.text

    logged_in_client.post(
        f"/ui/students/{ana['id']}/edit",
        data={"student_code": "2024002", "full_name": "Ana Silva", "birth_date": "2010-05-01"}
    )
    assert logged_in_client.get("/api/students").json()[0]["student_code"] == "2024002"


def test_delete_student_from_form(logged_in_client):
    ana = make_student(logged_in_client)
    logged_in_client.post(f"/ui/students/{ana['id']}/delete")
    assert logged_in_client.get("/api/students").json() == []


def test_student_documents_panel(logged_in_client):
    ana = make_student(logged_in_client)

    page = logged_in_client.get("/", params={"student": ana["id"]})
    assert "Documentos Digitalizados" in page.text
    assert "Nenhum documento anexado ainda." in page.text

    response = logged_in_client.post(
        f"/ui/students/{ana['id']}/files",
        files={"file": ("rg.png", b"png", "image/png")},
        follow_redirects=False
    )
    assert response.status_code == 303
    assert response.headers["location"] == f"/?student={ana['id']}"

    page = logged_in_client.get(response.headers["location"])
    assert "rg.png" in page.text
    assert "PNG" in page.text


def test_download_and_delete_document(logged_in_client):
    ana = make_student(logged_in_client)
    record = upload(logged_in_client, ana["id"], content=b"scanned").json()

    response = logged_in_client.get(f"/ui/files/{record['id']}/download", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"].startswith("/storage/")
    assert logged_in_client.get(response.headers["location"]).content == b"scanned"

    logged_in_client.post(f"/ui/files/{record['id']}/delete", data={"student": ana["id"]})
    assert logged_in_client.get(f"/api/students/{ana['id']}/files").json() == []


def test_missing_document_shows_flash(logged_in_client):
    page = logged_in_client.get("/ui/files/999/download")
    assert page.status_code == 200
    assert "Arquivo não encontrado" in page.text


def test_template_filters():
    assert br_date("2010-05-01") == "01/05/2010"
    assert br_date(None) == ""
    assert mime_label("application/pdf") == "PDF"
    assert mime_label("image/jpeg") == "JPEG"
