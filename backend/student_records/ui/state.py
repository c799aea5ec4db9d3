# student_records/ui/state.py
"""
View model of the admin page

The page state is an immutable ViewState. Every user action is an action
object, and reduce(state, action) returns the next state without touching
the database, so page behaviour can be checked without rendering anything.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple, Union

# modal values
MODAL_NONE = None
MODAL_CREATE = "new"
MODAL_EDIT = "edit"

EMPTY_FORM = {"student_code": "", "full_name": "", "birth_date": ""}


@dataclass(frozen=True)
class ViewState:
    students: Tuple[Any, ...] = ()
    search: str = ""
    selected: Optional[Any] = None
    files: Tuple[Any, ...] = ()
    modal: Optional[str] = MODAL_NONE
    editing: Optional[Any] = None
    form: Dict[str, str] = field(default_factory=lambda: dict(EMPTY_FORM))
    error: Optional[str] = None
    flash: Optional[str] = None
    loading: bool = True


# Actions

@dataclass(frozen=True)
class StudentsLoaded:
    students: List[Any]


@dataclass(frozen=True)
class SearchChanged:
    term: str


@dataclass(frozen=True)
class StudentSelected:
    student: Any


@dataclass(frozen=True)
class SelectionCleared:
    pass


@dataclass(frozen=True)
class FilesLoaded:
    files: List[Any]


@dataclass(frozen=True)
class CreateOpened:
    pass


@dataclass(frozen=True)
class EditOpened:
    student: Any


@dataclass(frozen=True)
class ModalClosed:
    pass


@dataclass(frozen=True)
class FormRejected:
    """A create/edit submission failed; keep the modal open with the typed values"""
    form: Dict[str, str]
    error: str


@dataclass(frozen=True)
class FlashShown:
    message: str


Action = Union[
    StudentsLoaded, SearchChanged, StudentSelected, SelectionCleared, FilesLoaded,
    CreateOpened, EditOpened, ModalClosed, FormRejected, FlashShown,
]


def student_form(student) -> Dict[str, str]:
    birth_date = student.birth_date
    return {
        "student_code": student.student_code,
        "full_name": student.full_name,
        "birth_date": birth_date.isoformat() if hasattr(birth_date, "isoformat") else str(birth_date),
    }


def reduce(state: ViewState, action: Action) -> ViewState:
    if isinstance(action, StudentsLoaded):
        students = tuple(action.students)
        selected = state.selected
        # a selected student that no longer exists is dropped together with its files
        if selected is not None and all(s.id != selected.id for s in students):
            return replace(state, students=students, selected=None, files=(), loading=False)
        return replace(state, students=students, loading=False)

    if isinstance(action, SearchChanged):
        return replace(state, search=action.term)

    if isinstance(action, StudentSelected):
        return replace(state, selected=action.student, files=())

    if isinstance(action, SelectionCleared):
        return replace(state, selected=None, files=())

    if isinstance(action, FilesLoaded):
        return replace(state, files=tuple(action.files))

    if isinstance(action, CreateOpened):
        return replace(state, modal=MODAL_CREATE, editing=None, form=dict(EMPTY_FORM), error=None)

    if isinstance(action, EditOpened):
        return replace(
            state,
            modal=MODAL_EDIT,
            editing=action.student,
            form=student_form(action.student),
            error=None,
        )

    if isinstance(action, ModalClosed):
        return replace(state, modal=MODAL_NONE, editing=None, form=dict(EMPTY_FORM), error=None)

    if isinstance(action, FormRejected):
        modal = state.modal or MODAL_CREATE
        return replace(state, modal=modal, form=dict(action.form), error=action.error)

    if isinstance(action, FlashShown):
        return replace(state, flash=action.message)

    raise TypeError(f"Unknown action: {action!r}")


def filter_students(students, term: str) -> List[Any]:
    """Case-insensitive substring match over full name and student code"""
    term = (term or "").lower()
    if not term:
        return list(students)
    return [
        s for s in students
        if term in s.full_name.lower() or term in s.student_code.lower()
    ]


def visible_students(state: ViewState) -> List[Any]:
    return filter_students(state.students, state.search)
