# student_records/routers/ui.py
from datetime import date
from pathlib import Path
from typing import Optional
from urllib.parse import urlencode
import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool

from .. import errors
from ..config import settings
from ..dependencies import get_file_service, get_student_service
from ..services.file_services import FileService
from ..services.student_service import StudentService
from ..ui import state as ui_state
from .students import read_upload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ui"], include_in_schema=False)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

LOGIN_ERROR = "Credenciais inválidas. Tente novamente."
SESSION_KEY = "cpm_auth"


def br_date(value) -> str:
    """dd/mm/yyyy, as shown everywhere in the admin"""
    if not value:
        return ""
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    return value.strftime("%d/%m/%Y")


def mime_label(mime_type: str) -> str:
    return (mime_type or "").split("/")[-1].upper()


templates.env.filters["br_date"] = br_date
templates.env.filters["mime_label"] = mime_label


class LoginRequired(Exception):
    """Raised by require_login; main.py turns it into a redirect to /login"""


def require_login(request: Request) -> None:
    if not request.session.get(SESSION_KEY):
        raise LoginRequired()


def page_url(**params) -> str:
    params = {k: v for k, v in params.items() if v not in (None, "")}
    return "/?" + urlencode(params) if params else "/"


def redirect(url: str) -> RedirectResponse:
    # 303 so the browser re-fetches the page with GET
    return RedirectResponse(url, status_code=303)


def flash(request: Request, message: str) -> None:
    request.session["flash"] = message


def parse_birth_date(value: Optional[str]) -> Optional[date]:
    value = (value or "").strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise errors.ValidationError(errors.INVALID_DATA)


# Login

@router.get("/login")
def login_page(request: Request):
    if request.session.get(SESSION_KEY):
        return redirect("/")
    return templates.TemplateResponse(request, "login.html", {"error": None, "email": ""})


@router.post("/login")
def login(request: Request, email: str = Form(""), password: str = Form("")):
    if email.strip() == settings.ADMIN_EMAIL and password == settings.ADMIN_PASSWORD:
        request.session[SESSION_KEY] = True
        logger.info(f"Admin login: {email.strip()}")
        return redirect("/")

    logger.warning(f"Failed admin login attempt for {email.strip()!r}")
    return templates.TemplateResponse(
        request,
        "login.html",
        {"error": LOGIN_ERROR, "email": email},
        status_code=401
    )


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return redirect("/login")


# Dashboard

@router.get("/", dependencies=[Depends(require_login)])
def dashboard(
    request: Request,
    q: str = "",
    student: Optional[int] = None,
    modal: Optional[str] = None,
    edit: Optional[int] = None,
    students: StudentService = Depends(get_student_service),
    files: FileService = Depends(get_file_service)
):
    view = ui_state.ViewState()
    try:
        view = ui_state.reduce(view, ui_state.StudentsLoaded(students.list_students()))
    except errors.AppError as e:
        view = ui_state.reduce(view, ui_state.StudentsLoaded([]))
        view = ui_state.reduce(view, ui_state.FlashShown(e.message))

    view = ui_state.reduce(view, ui_state.SearchChanged(q))

    if student is not None:
        selected = next((s for s in view.students if s.id == student), None)
        if selected is not None:
            view = ui_state.reduce(view, ui_state.StudentSelected(selected))
            try:
                view = ui_state.reduce(view, ui_state.FilesLoaded(files.list_files(selected.id)))
            except errors.AppError as e:
                view = ui_state.reduce(view, ui_state.FlashShown(e.message))

    if modal == ui_state.MODAL_CREATE:
        view = ui_state.reduce(view, ui_state.CreateOpened())
    elif modal == ui_state.MODAL_EDIT and edit is not None:
        editing = next((s for s in view.students if s.id == edit), None)
        if editing is not None:
            view = ui_state.reduce(view, ui_state.EditOpened(editing))

    rejected = request.session.pop("rejected_form", None)
    if rejected and view.modal:
        view = ui_state.reduce(view, ui_state.FormRejected(rejected["form"], rejected["error"]))

    message = request.session.pop("flash", None)
    if message:
        view = ui_state.reduce(view, ui_state.FlashShown(message))

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "view": view,
            "visible": ui_state.visible_students(view),
            "page_url": page_url,
        }
    )


# Student actions

def _reject_form(request: Request, form: dict, error: str) -> None:
    request.session["rejected_form"] = {"form": form, "error": error}


@router.post("/ui/students", dependencies=[Depends(require_login)])
def ui_create_student(
    request: Request,
    student_code: str = Form(""),
    full_name: str = Form(""),
    birth_date: str = Form(""),
    q: str = Form(""),
    service: StudentService = Depends(get_student_service)
):
    form = {"student_code": student_code, "full_name": full_name, "birth_date": birth_date}
    try:
        service.create_student(student_code, full_name, parse_birth_date(birth_date))
    except errors.AppError as e:
        _reject_form(request, form, e.message)
        return redirect(page_url(q=q, modal=ui_state.MODAL_CREATE))
    return redirect(page_url(q=q))


@router.post("/ui/students/{student_id}/edit", dependencies=[Depends(require_login)])
def ui_update_student(
    request: Request,
    student_id: int,
    student_code: str = Form(""),
    full_name: str = Form(""),
    birth_date: str = Form(""),
    q: str = Form(""),
    service: StudentService = Depends(get_student_service)
):
    form = {"student_code": student_code, "full_name": full_name, "birth_date": birth_date}
    try:
        service.update_student(student_id, student_code, full_name, parse_birth_date(birth_date))
    except errors.NotFoundError as e:
        flash(request, e.message)
        return redirect(page_url(q=q))
    except errors.AppError as e:
        _reject_form(request, form, e.message)
        return redirect(page_url(q=q, modal=ui_state.MODAL_EDIT, edit=student_id))
    return redirect(page_url(q=q))


@router.post("/ui/students/{student_id}/delete", dependencies=[Depends(require_login)])
def ui_delete_student(
    request: Request,
    student_id: int,
    q: str = Form(""),
    service: StudentService = Depends(get_student_service)
):
    try:
        service.delete_student(student_id)
    except errors.AppError as e:
        flash(request, e.message)
    return redirect(page_url(q=q))


# File actions

@router.post("/ui/students/{student_id}/files", dependencies=[Depends(require_login)])
async def ui_upload_file(
    request: Request,
    student_id: int,
    file: Optional[UploadFile] = File(None),
    q: str = Form(""),
    service: FileService = Depends(get_file_service)
):
    try:
        data = await read_upload(file)
        await run_in_threadpool(service.upload_file, student_id, file.filename, data, file.content_type)
    except errors.AppError as e:
        flash(request, e.message)
    return redirect(page_url(q=q, student=student_id))


@router.get("/ui/files/{file_id}/download", dependencies=[Depends(require_login)])
def ui_download_file(
    request: Request,
    file_id: int,
    student: Optional[int] = None,
    service: FileService = Depends(get_file_service)
):
    try:
        url = service.get_download_url(file_id)
    except errors.AppError as e:
        flash(request, e.message)
        return redirect(page_url(student=student))
    return redirect(url)


@router.post("/ui/files/{file_id}/delete", dependencies=[Depends(require_login)])
def ui_delete_file(
    request: Request,
    file_id: int,
    student: Optional[int] = Form(None),
    q: str = Form(""),
    service: FileService = Depends(get_file_service)
):
    try:
        service.delete_file(file_id)
    except errors.AppError as e:
        flash(request, e.message)
    return redirect(page_url(q=q, student=student))
