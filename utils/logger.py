import logging
import sys
from pathlib import Path
from typing import List, Optional

# Global flag for verbose output (set by main.py)
# Console echo goes to stderr; stdout carries results and JSON only
VERBOSE = False

_handlers: List[logging.Handler] = []


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Configure root logging; optionally mirror every record to a file"""
    global VERBOSE
    VERBOSE = verbose

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Replace rather than stack handlers on repeated calls
    for handler in _handlers:
        root.removeHandler(handler)
        handler.close()
    _handlers.clear()

    # The log helpers below do the console echo; without a handler of our own
    # the first record would trigger logging's implicit stderr basicConfig
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
        handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(message)s'))
    else:
        handler = logging.NullHandler()
    root.addHandler(handler)
    _handlers.append(handler)


def logInfo(message):
    if VERBOSE:
        print(message, file=sys.stderr)
    logging.info(message)

def logError(message):
    print(f"❌ {message}", file=sys.stderr)  # Always show errors
    logging.error(message)

def logWarn(message):
    print(f"⚠️ {message}", file=sys.stderr)  # Always show warnings
    logging.warning(message)

def logDebug(message):
    if VERBOSE and logging.getLogger().isEnabledFor(logging.DEBUG):
        print(f"[DEBUG] {message}", file=sys.stderr)
    logging.debug(message)
