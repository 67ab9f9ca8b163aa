from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Prompt:
    """Inputs shared by both clients for a single run."""

    system_instructions: str
    user_input: str
    image: bytes | None = None
    image_mime_type: str = "image/png"

    def image_base64(self) -> str | None:
        if self.image is None:
            return None
        return base64.b64encode(self.image).decode("ascii")

    def image_data_url(self) -> str | None:
        encoded = self.image_base64()
        if encoded is None:
            return None
        return f"data:{self.image_mime_type};base64,{encoded}"


def load_prompt(
    system_path: Path | str,
    user_path: Path | str,
    image_path: Path | str | None = None,
    image_mime_type: str = "image/png",
) -> Prompt:
    """Read the prompt documents from disk.

    Both text files are required. The image is optional: when it is missing a
    warning is logged and the prompt carries no image.
    """

    system_instructions = Path(system_path).read_text(encoding="utf-8")
    user_input = Path(user_path).read_text(encoding="utf-8")

    image = None
    if image_path is not None:
        try:
            image = Path(image_path).read_bytes()
        except FileNotFoundError:
            logger.warning("%s not found, proceeding without image", image_path)

    logger.debug(
        "Loaded prompt: %d chars of instructions, %d chars of input, image=%s",
        len(system_instructions),
        len(user_input),
        "yes" if image is not None else "no",
    )
    return Prompt(system_instructions, user_input, image, image_mime_type)
