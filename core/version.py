from typing import Final

NAME: Final[str] = "JSONLocalize"
VERSION: Final[str] = "1.0.0"
