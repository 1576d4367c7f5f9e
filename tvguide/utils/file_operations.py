"""
File operation utilities

This module handles page downloads and writing the schedule file.
"""
import json
import logging
import os
from pathlib import Path
from typing import Any

import aiofiles
import httpx


logger = logging.getLogger(__name__)


async def download_page(
    url: str,
    client: httpx.AsyncClient,
) -> httpx.Response:
    """
    Download a page and return the successful response

    Args:
        url: URL to download
        client: Open HTTP client; cookies set by earlier requests are reused

    Returns:
        Response with the body left undecoded; the parser applies the
        header charset or the encoding the document declares

    Raises:
        httpx.HTTPError: On transport errors or non-2xx responses
    """
    logger.info(f"Downloading page from {url}...")

    response = await client.get(url)
    response.raise_for_status()

    size_kb = len(response.content) / 1024
    logger.info(f"Downloaded {size_kb:.1f} KB from {response.url} (HTTP {response.status_code})")
    return response


async def write_json_file(path: Path | str, payload: Any) -> Path:
    """
    Write payload as pretty-printed UTF-8 JSON, replacing the file atomically

    Args:
        path: Destination file
        payload: JSON-serializable data

    Returns:
        Path of the written file

    Raises:
        OSError: If the file cannot be written
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    temp_file = target.with_name(f".{target.name}.tmp")

    content = json.dumps(payload, indent=2, ensure_ascii=False)

    try:
        async with aiofiles.open(temp_file, "w", encoding="utf-8") as f:
            await f.write(content)
        os.replace(temp_file, target)
    except OSError:
        cleanup_temp_file(temp_file)
        raise

    logger.info(f"Wrote {len(content.encode('utf-8')) / 1024:.1f} KB to {target}")
    return target


def cleanup_temp_file(file_path: Path) -> bool:
    """
    Safely delete a temporary file

    Args:
        file_path: Path to file to delete

    Returns:
        True if deleted successfully, False otherwise
    """
    if not file_path or not file_path.exists():
        return False

    try:
        file_path.unlink()
        logger.debug(f"Cleaned up temporary file: {file_path}")
        return True
    except (OSError, PermissionError) as e:
        logger.warning(f"Failed to delete temporary file {file_path}: {e}")
        return False
