import json
from functools import lru_cache
from pathlib import Path

from screensort.llm.exceptions import ModelError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


@lru_cache(maxsize=None)
def load_prompt_template(name: str, prompt_dir: Path = _DEFAULT_PROMPT_DIR) -> str:
    """Load ``<name>_prompt.txt``; the template has a single ``{screenshot_text}`` placeholder.

    Raises:
        ModelError: if the file cannot be read.
    """
    path = prompt_dir / f"{name}_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ModelError(f"Failed to load prompt template '{name}': {exc}") from exc


@lru_cache(maxsize=None)
def load_json_schema(name: str, prompt_dir: Path = _DEFAULT_PROMPT_DIR) -> dict[str, object]:
    """Load and parse ``<name>_schema.json``.

    Raises:
        ModelError: if the file cannot be read or is not a JSON object.
    """
    path = prompt_dir / f"{name}_schema.json"
    try:
        schema = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ModelError(f"Failed to load JSON schema '{name}': {exc}") from exc
    if not isinstance(schema, dict):
        raise ModelError(f"JSON schema '{name}' must be an object")
    return schema
