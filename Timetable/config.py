from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Document seeding ---
    seed_default_entry: bool = True # Start a fresh document with one example row
    default_start: str = "5:45"
    default_end: str = "6:25"
    default_task: str = "Wake up & freshen up"

    # --- Export ---
    default_export_name: str = "timetable" # Suggested in the file-name prompt
    export_suffix: str = ".json"
    export_indent: Optional[int] = None # None keeps the payload on one line

    # --- Display ---
    zero_pad_hours: bool = False # "05:45" instead of "5:45"

    # --- CLI ---
    document_path: Path = Path("timetable.json")
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="TIMETABLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra='ignore'
    )
