# core/utilities/download_manager.py
"""Download manager for the Unicode Character Database source tables."""
import logging
import os
import tempfile
import urllib.error
import urllib.request
from pathlib import Path
from typing import Callable, List, Optional
from config import PathConfig, UcdConfig, VERSION

logger = logging.getLogger(__name__)

class DownloadError(Exception):
    """Raised when a download fails irrecoverably."""
    pass

class UcdDownloader:
    """Fetches UnicodeData.txt and NameAliases.txt into the UCD directory."""

    CHUNK_SIZE = 64 * 1024

    def __init__(self, base_url: Optional[str] = None, target_dir: Optional[Path] = None,
                 progress_callback: Optional[Callable[[str, int, int], None]] = None):
        self.base_url = base_url or UcdConfig.BASE_URL
        self.target_dir = Path(target_dir or PathConfig.get_ucd_dir())
        self.progress_callback = progress_callback

    def check_existing_files(self) -> dict:
        """Map each UCD filename to whether a non-empty copy is present."""
        status = {}
        for filename in UcdConfig.FILES:
            path = self.target_dir / filename
            status[filename] = path.exists() and path.stat().st_size > 0
        return status

    def fetch_all(self, force: bool = False) -> List[Path]:
        """
        Download every UCD file that's missing (or all of them if forced).

        Returns:
            Paths of the files now present

        Raises:
            DownloadError: if any file can't be fetched
        """
        existing = self.check_existing_files()
        paths = []
        for filename in UcdConfig.FILES:
            target = self.target_dir / filename
            if existing[filename] and not force:
                logger.info(f"{filename} already downloaded")
                paths.append(target)
                continue
            url = UcdConfig.get_file_url(filename, self.base_url)
            logger.info(f"Downloading {filename} from {url}")
            self._download_file(url, target)
            paths.append(target)
        return paths

    def _download_file(self, url: str, target: Path):
        """Stream url into a temp file beside target, then rename it into place."""
        target.parent.mkdir(parents=True, exist_ok=True)
        req = urllib.request.Request(url, headers={'User-Agent': f'chars-{VERSION}'})
        fd, temp_name = tempfile.mkstemp(prefix=f".{target.name}_", dir=target.parent)
        try:
            with os.fdopen(fd, 'wb') as f, urllib.request.urlopen(req, timeout=120) as response:
                total_size = int(response.headers.get('Content-Length', 0) or 0)
                downloaded = 0
                while True:
                    chunk = response.read(self.CHUNK_SIZE)
                    if not chunk:
                        break
                    f.write(chunk)
                    downloaded += len(chunk)
                    if self.progress_callback:
                        self.progress_callback(target.name, downloaded, total_size)

            if downloaded == 0:
                raise DownloadError(f"Empty response for {url}")
            os.replace(temp_name, target)
        except (urllib.error.URLError, OSError) as e:
            raise DownloadError(f"Failed to download {target.name}: {e}") from e
        finally:
            if os.path.exists(temp_name):
                os.unlink(temp_name)
