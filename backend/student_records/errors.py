# student_records/errors.py
"""Domain errors raised by the service layer and rendered as {"error": message}"""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Missing or malformed input"""
    status_code = 400


class ConflictError(AppError):
    """Unique constraint violation (reported as 400 by the API)"""
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class ServiceError(AppError):
    """Unclassified failure of the database or blob storage"""
    status_code = 500


# User-facing messages
MISSING_FIELDS = "Todos os campos são obrigatórios"
INVALID_DATA = "Dados inválidos"
DUPLICATE_CODE = "Código de aluno já cadastrado"
STUDENT_NOT_FOUND = "Aluno não encontrado"
FILE_NOT_FOUND = "Arquivo não encontrado"
NO_FILE_SENT = "Nenhum arquivo enviado"
FILE_TOO_LARGE = "Arquivo muito grande"
LIST_STUDENTS_FAILED = "Erro ao buscar alunos"
CREATE_STUDENT_FAILED = "Erro ao cadastrar aluno"
UPDATE_STUDENT_FAILED = "Erro ao atualizar aluno"
DELETE_STUDENT_FAILED = "Erro ao excluir aluno"
LIST_FILES_FAILED = "Erro ao buscar arquivos"
UPLOAD_FAILED = "Erro ao salvar arquivo"
DELETE_FILE_FAILED = "Erro ao excluir arquivo"
