import logging
import sys
from pathlib import Path

# Add project root to sys.path so 'logicmatch' is found when run as a script
sys.path.append(str(Path(__file__).parent.parent))

from logicmatch.examples import main

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG if "-v" in sys.argv[1:] else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    main()
