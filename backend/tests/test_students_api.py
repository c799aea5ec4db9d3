from student_records.database.models import Student

from .helpers import make_student, upload


def test_student_lifecycle(client):
    created = make_student(client, code="2024001", name="Ana Silva", birth="2010-05-01")
    assert isinstance(created["id"], int)
    assert created["student_code"] == "2024001"
    assert created["birth_date"] == "2010-05-01"

    listed = client.get("/api/students").json()
    assert [s["id"] for s in listed] == [created["id"]]

    response = client.put(
        f"/api/students/{created['id']}",
        json={"student_code": "2024002", "full_name": "Ana Silva", "birth_date": "2010-05-01"}
    )
    assert response.status_code == 200
    assert response.json()["student_code"] == "2024002"

    response = client.delete(f"/api/students/{created['id']}")
    assert response.status_code == 204
    assert response.content == b""

    assert client.get("/api/students").json() == []


def test_list_is_ordered_by_full_name(client):
    make_student(client, code="3", name="Carlos Souza")
    make_student(client, code="1", name="Ana Silva")
    make_student(client, code="2", name="Bruno Lima")

    names = [s["full_name"] for s in client.get("/api/students").json()]
    assert names == ["Ana Silva", "Bruno Lima", "Carlos Souza"]


def test_create_requires_all_fields(client):
    for body in (
        {"full_name": "Ana", "birth_date": "2010-05-01"},
        {"student_code": "1", "birth_date": "2010-05-01"},
        {"student_code": "1", "full_name": "Ana"},
        {"student_code": "  ", "full_name": "Ana", "birth_date": "2010-05-01"},
        {"student_code": "1", "full_name": "Ana", "birth_date": ""},
    ):
        response = client.post("/api/students", json=body)
        assert response.status_code == 400, body
        assert response.json() == {"error": "Todos os campos são obrigatórios"}

    assert client.get("/api/students").json() == []


def test_create_rejects_malformed_date(client):
    response = client.post(
        "/api/students",
        json={"student_code": "1", "full_name": "Ana", "birth_date": "01/05/2010"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Dados inválidos"}


def test_create_accepts_numeric_code(client):
    response = client.post(
        "/api/students",
        json={"student_code": 2024001, "full_name": "Ana Silva", "birth_date": "2010-05-01"}
    )
    assert response.status_code == 201
    assert response.json()["student_code"] == "2024001"


def test_duplicate_code_is_a_conflict(client, db_session):
    make_student(client, code="2024001", name="Ana Silva")

    response = client.post(
        "/api/students",
        json={"student_code": "2024001", "full_name": "Outra Pessoa", "birth_date": "2011-01-01"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Código de aluno já cadastrado"}
    assert db_session.query(Student).count() == 1

    # the session stays usable after the rejected insert
    make_student(client, code="2024002", name="Outra Pessoa")


def test_update_code_collision_is_a_conflict(client):
    make_student(client, code="A1", name="Ana Silva")
    bruno = make_student(client, code="B2", name="Bruno Lima")

    response = client.put(
        f"/api/students/{bruno['id']}",
        json={"student_code": "A1", "full_name": "Bruno Lima", "birth_date": "2010-05-01"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Código de aluno já cadastrado"}

    codes = sorted(s["student_code"] for s in client.get("/api/students").json())
    assert codes == ["A1", "B2"]


def test_update_keeping_own_code(client):
    ana = make_student(client, code="A1", name="Ana Silva")
    response = client.put(
        f"/api/students/{ana['id']}",
        json={"student_code": "A1", "full_name": "Ana Maria Silva", "birth_date": "2010-05-02"}
    )
    assert response.status_code == 200
    assert response.json()["full_name"] == "Ana Maria Silva"
    assert response.json()["birth_date"] == "2010-05-02"


def test_update_unknown_student(client):
    response = client.put(
        "/api/students/999",
        json={"student_code": "X", "full_name": "Ninguém", "birth_date": "2010-05-01"}
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Aluno não encontrado"}


def test_update_requires_all_fields(client):
    ana = make_student(client)
    response = client.put(f"/api/students/{ana['id']}", json={"student_code": "X"})
    assert response.status_code == 400
    assert response.json() == {"error": "Todos os campos são obrigatórios"}


def test_delete_unknown_student_is_noop(client):
    assert client.delete("/api/students/12345").status_code == 204


def test_delete_student_cascades_files_and_blobs(client, storage):
    ana = make_student(client)
    first = upload(client, ana["id"], name="rg.png", mime="image/png").json()
    second = upload(client, ana["id"], name="cpf.pdf").json()

    blobs = [storage.resolve(f["storage_path"]) for f in (first, second)]
    assert all(b.is_file() for b in blobs)

    assert client.delete(f"/api/students/{ana['id']}").status_code == 204

    assert not any(b.exists() for b in blobs)
    assert client.get(f"/api/students/{ana['id']}/files").json() == []
    assert client.get(f"/api/files/{first['id']}").status_code == 404


def test_delete_student_leaves_other_students_alone(client):
    ana = make_student(client, code="1", name="Ana Silva")
    bruno = make_student(client, code="2", name="Bruno Lima")
    upload(client, bruno["id"])

    client.delete(f"/api/students/{ana['id']}")

    assert [s["id"] for s in client.get("/api/students").json()] == [bruno["id"]]
    assert len(client.get(f"/api/students/{bruno['id']}/files").json()) == 1


def test_unknown_route_uses_error_body(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert "error" in response.json()
