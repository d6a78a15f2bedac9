"""Write generated units to an output directory."""

from pathlib import Path
from typing import List

from .codegen.core.generator import GenerationResult, GeneratorError
from .logging_config import get_logger

logger = get_logger(__name__)


def write_result(result: GenerationResult, output_dir: str | Path) -> List[Path]:
    """Write every unit of ``result`` into ``output_dir``.

    The directory is created if needed and existing files are overwritten.
    Table units are written in catalog order, followed by the manifest.

    Args:
        result: A successful generation result.
        output_dir: Target directory.

    Returns:
        Paths of the written files, in write order.

    Raises:
        GeneratorError: If ``result`` is a failed result, or a unit file name
            is not a plain file name inside ``output_dir``.
    """
    if not result.success:
        raise GeneratorError(result.error_message or "Generation failed")

    for unit in result.files:
        if Path(unit.file_name).name != unit.file_name or unit.file_name in ("", ".", ".."):
            raise GeneratorError(f"Refusing to write unit with file name {unit.file_name!r}")

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for unit in result.files:
        path = output_dir / unit.file_name
        path.write_text(unit.code, encoding="utf-8")
        logger.info("Wrote %s", path)
        written.append(path)

    return written
