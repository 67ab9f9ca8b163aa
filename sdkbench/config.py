from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    debug: bool = False
    log_file: str = "logs/sdkbench.log"

    google_api_key: str | None = None
    google_langchain_api_key: str | None = None

    model: str = "gemini-2.5-flash"
    temperature: float = 0.0
    thinking_budget: int = 0
    tolerance_ms: int = 8000

    system_instructions_path: Path = Path("system-instructions.md")
    user_input_path: Path = Path("user-input.md")
    image_path: Path = Path("snapshot.png")
    image_mime_type: str = "image/png"
    results_dir: Path = Path("results")

    # time left for LangChain tracing uploads before the process exits
    trace_flush_seconds: float = 4.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
