from pathlib import Path


class MsgdefResolverError(Exception):
    pass


class DefinitionNotFoundError(MsgdefResolverError):
    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"definition not found for: {type_name}")


class DefinitionReadError(MsgdefResolverError):
    def __init__(self, type_name: str, path: Path, reason: str) -> None:
        self.type_name = type_name
        self.path = path
        super().__init__(f"failed to read definition for {type_name} from {path}: {reason}")


class ConfigurationError(MsgdefResolverError):
    pass
