from pathlib import Path


class AutomaticError(Exception):
    """Base user-facing application error."""


class InvalidNameError(AutomaticError):
    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"Invalid {kind} name: {name!r}")


class DirectoryMissingError(AutomaticError):
    def __init__(self, project: str, directory: str) -> None:
        self.project = project
        self.directory = directory
        if directory:
            message = f"Project directory does not exist: {directory}"
        else:
            message = f"Project '{project}' has no directory configured"
        super().__init__(message)


class AutomaticFileError(AutomaticError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class MalformedDataError(AutomaticFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Malformed data ({detail})")


class InvalidConfigSchemaError(AutomaticFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")


class UnknownAgentIdError(AutomaticError):
    def __init__(self, agent_id: str) -> None:
        self.agent_id = agent_id
        super().__init__(f"Unknown agent: {agent_id}")


class NotFoundError(AutomaticError):
    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} not found: {name}")


class RemoteFetchError(AutomaticError):
    """Raised when no strategy could retrieve a remote skill document."""


class AlreadyExistsError(AutomaticError):
    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} already exists: {name}")
