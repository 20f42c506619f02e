"""Exception hierarchy for the photo organizer."""


class OrganizerError(Exception):
    """Base exception for all organizer errors."""


class ConfigError(OrganizerError):
    """Invalid or unusable configuration (bad start time, unwritable target)."""


class ExternalToolError(OrganizerError):
    """An external subprocess (ImageMagick) failed."""

    def __init__(self, tool: str, exit_code: int, stderr: str) -> None:
        super().__init__(f"{tool} exited with code {exit_code}: {stderr}")
        self.tool = tool
        self.exit_code = exit_code
        self.stderr = stderr
