from attention_editor.storage.dump import DUMP_FILE_NAME, DUMP_VERSION, JsonDumpBackend
from attention_editor.storage.ini_directory import (
    AS_DIRECTORY_NAME,
    ATTRIBUTES_FILE_NAME,
    PRIORITIES_FILE_NAME,
    IniDirectoryBackend,
    section_name_for,
)

__all__ = [
    "AS_DIRECTORY_NAME",
    "ATTRIBUTES_FILE_NAME",
    "DUMP_FILE_NAME",
    "DUMP_VERSION",
    "PRIORITIES_FILE_NAME",
    "IniDirectoryBackend",
    "JsonDumpBackend",
    "section_name_for",
]
