import logging

from .exceptions import LibraryError
from .library_system import main

logger = logging.getLogger("library_lending")

try:
    main()
except LibraryError as e:
    logger.error("LibraryError bubbled to top-level | %s", e)
    raise
except Exception as e:
    logger.exception("Unhandled fatal error | %s", e)
    raise
