# ui/cli/console_utils.py
import sys
from config import FRAME_WIDTH

def print_header(title):
    """Print a clean header with title."""
    print("\n" + "═" * FRAME_WIDTH)
    print(f"  {title}")
    print("═" * FRAME_WIDTH)

def print_error(message: str):
    """Print an error line to stderr."""
    print(f"  ❗️ {message}", file=sys.stderr)

def format_size(num_bytes: int) -> str:
    """Format a byte count in a human-readable way."""
    if num_bytes < 1024:
        return f"{num_bytes} B"
    elif num_bytes < 1024 ** 2:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / 1024 ** 2:.1f} MB"

def format_elapsed_time(seconds: float) -> str:
    """Format elapsed time in a human-readable way."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        seconds = seconds % 60
        return f"{minutes}m {seconds:.0f}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        return f"{hours}h {minutes}m"
