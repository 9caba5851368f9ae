"""Classificação de arquivos por MIME type e nome.

Funções totais: qualquer entrada (inclusive vazia ou lixo) resulta em
uma categoria do enum ou em uma extensão, nunca em exceção.
"""

from __future__ import annotations

from enum import StrEnum


class FileCategory(StrEnum):
    """Categoria semântica do arquivo, usada para escolher o processamento."""

    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    DOCUMENT = "document"
    ARCHIVE = "archive"
    CODE = "code"
    OTHER = "other"


DEFAULT_EXTENSION = ".bin"

_PREFIX_CATEGORIES: tuple[tuple[str, FileCategory], ...] = (
    ("image/", FileCategory.IMAGE),
    ("audio/", FileCategory.AUDIO),
    ("video/", FileCategory.VIDEO),
)

_DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
_XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
_PPTX = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

MIME_TO_EXTENSION: dict[str, str] = {
    # Imagens
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/bmp": ".bmp",
    # Áudio
    "audio/mpeg": ".mp3",
    "audio/wav": ".wav",
    "audio/ogg": ".ogg",
    "audio/amr": ".amr",
    "audio/x-m4a": ".m4a",
    # Vídeo
    "video/mp4": ".mp4",
    "video/quicktime": ".mov",
    "video/x-msvideo": ".avi",
    "video/webm": ".webm",
    # Documentos
    "application/pdf": ".pdf",
    "application/msword": ".doc",
    _DOCX: ".docx",
    "application/vnd.ms-excel": ".xls",
    _XLSX: ".xlsx",
    "application/vnd.ms-powerpoint": ".ppt",
    _PPTX: ".pptx",
    "application/rtf": ".rtf",
    "application/vnd.oasis.opendocument.text": ".odt",
    "application/vnd.oasis.opendocument.spreadsheet": ".ods",
    "text/plain": ".txt",
    "text/markdown": ".md",
    "text/csv": ".csv",
    # Compactados
    "application/zip": ".zip",
    "application/x-rar-compressed": ".rar",
    "application/vnd.rar": ".rar",
    "application/x-7z-compressed": ".7z",
    "application/x-tar": ".tar",
    "application/gzip": ".gz",
    "application/x-gzip": ".gz",
    "application/x-bzip2": ".bz2",
    # Código
    "application/json": ".json",
    "application/xml": ".xml",
    "text/xml": ".xml",
    "text/html": ".html",
    "text/css": ".css",
    "text/javascript": ".js",
    "application/javascript": ".js",
    "text/x-python": ".py",
    "text/x-java-source": ".java",
    "text/x-c": ".c",
    "text/x-yaml": ".yaml",
    "application/x-yaml": ".yaml",
}

_DOCUMENT_MIMES = frozenset(
    {
        "application/pdf", "application/msword", _DOCX,
        "application/vnd.ms-excel", _XLSX, "application/vnd.ms-powerpoint", _PPTX,
        "application/rtf", "application/vnd.oasis.opendocument.text",
        "application/vnd.oasis.opendocument.spreadsheet",
        "text/plain", "text/markdown", "text/csv",
    }
)

_ARCHIVE_MIMES = frozenset(
    {
        "application/zip", "application/x-rar-compressed", "application/vnd.rar",
        "application/x-7z-compressed", "application/x-tar",
        "application/gzip", "application/x-gzip", "application/x-bzip2",
    }
)

_CODE_MIMES = frozenset(
    {
        "application/json", "application/xml", "text/xml", "text/html", "text/css",
        "text/javascript", "application/javascript", "text/x-python",
        "text/x-java-source", "text/x-c", "text/x-yaml", "application/x-yaml",
    }
)

CATEGORY_BY_MIME: dict[str, FileCategory] = {
    **dict.fromkeys(_DOCUMENT_MIMES, FileCategory.DOCUMENT),
    **dict.fromkeys(_ARCHIVE_MIMES, FileCategory.ARCHIVE),
    **dict.fromkeys(_CODE_MIMES, FileCategory.CODE),
}

_EXTENSIONS_BY_CATEGORY: dict[FileCategory, tuple[str, ...]] = {
    FileCategory.IMAGE: (".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp"),
    FileCategory.AUDIO: (".mp3", ".wav", ".ogg", ".m4a", ".amr"),
    FileCategory.VIDEO: (".mp4", ".mov", ".avi", ".mkv", ".webm"),
    FileCategory.DOCUMENT: (
        ".pdf", ".doc", ".docx", ".txt", ".md", ".rtf", ".odt",
        ".xls", ".xlsx", ".csv", ".ods", ".ppt", ".pptx",
    ),
    FileCategory.ARCHIVE: (".zip", ".rar", ".7z", ".tar", ".gz", ".bz2"),
    FileCategory.CODE: (
        ".py", ".js", ".ts", ".jsx", ".tsx", ".java", ".cpp", ".c", ".go", ".rs",
        ".json", ".xml", ".yaml", ".yml", ".html", ".css",
    ),
}

CATEGORY_BY_EXTENSION: dict[str, FileCategory] = {
    ext: category
    for category, extensions in _EXTENSIONS_BY_CATEGORY.items()
    for ext in extensions
}


def normalize_mime_type(content_type: object) -> str:
    """Remove parâmetros (ex: charset) e normaliza caixa do MIME type."""
    if not isinstance(content_type, str):
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def extract_extension(file_name: object) -> str:
    """Extrai extensão com ponto (ex: ".jpg") ou string vazia se não houver.

    Nome sem ponto, ou terminado em ponto, não tem extensão.
    """
    if not isinstance(file_name, str):
        return ""
    last_dot = file_name.rfind(".")
    if last_dot == -1 or last_dot == len(file_name) - 1:
        return ""
    return file_name[last_dot:].lower()


def resolve_file_category(content_type: str, file_name: str | None = None) -> FileCategory:
    """Categoriza arquivo a partir de MIME type e nome.

    Prioridade:
    1. Prefixo do MIME type (image/, audio/, video/)
    2. MIME type exato (document, archive, code)
    3. Extensão do file_name, se informado
    4. FileCategory.OTHER

    Args:
        content_type: MIME type declarado (parâmetros são ignorados)
        file_name: Nome do arquivo para fallback por extensão

    Returns:
        Categoria do arquivo
    """
    mime_type = normalize_mime_type(content_type)

    for prefix, category in _PREFIX_CATEGORIES:
        if mime_type.startswith(prefix):
            return category

    category = CATEGORY_BY_MIME.get(mime_type)
    if category is not None:
        return category

    ext = extract_extension(file_name)
    if ext:
        return CATEGORY_BY_EXTENSION.get(ext, FileCategory.OTHER)

    return FileCategory.OTHER


def resolve_extension(content_type: str, file_name: str | None = None) -> str:
    """Resolve extensão do arquivo salvo localmente.

    Prioridade:
    1. Extensão do file_name (o nome fornecido pela plataforma prevalece)
    2. Mapeamento MIME type → extensão
    3. DEFAULT_EXTENSION (".bin")
    """
    ext = extract_extension(file_name)
    if ext:
        return ext
    return MIME_TO_EXTENSION.get(normalize_mime_type(content_type), DEFAULT_EXTENSION)
