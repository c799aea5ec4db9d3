from student_records.services.storage import LocalBlobStorage, StorageError


class FailingRemoveStorage(LocalBlobStorage):
    """Local storage whose remove() always fails"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.remove_calls = []

    def remove(self, paths):
        self.remove_calls.append(list(paths))
        raise StorageError("storage unavailable")


def make_student(client, code="2024001", name="Ana Silva", birth="2010-05-01"):
    response = client.post(
        "/api/students",
        json={"student_code": code, "full_name": name, "birth_date": birth}
    )
    assert response.status_code == 201, response.text
    return response.json()


def upload(client, student_id, name="boletim.pdf", content=b"%PDF-1.4 test", mime="application/pdf"):
    return client.post(
        f"/api/students/{student_id}/files",
        files={"file": (name, content, mime)}
    )
