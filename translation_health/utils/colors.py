"""ANSI color codes for terminal output."""


class Colors:
    """ANSI color codes for terminal output."""

    HEADER = '\033[95m'
    OKBLUE = '\033[94m'
    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'

    SEVERITY_COLORS = {
        'high': FAIL,
        'medium': WARNING,
        'low': OKCYAN,
    }

    STATUS_COLORS = {
        'open': FAIL,
        'resolved': OKGREEN,
        'ignored': DIM,
    }

    @classmethod
    def paint(cls, color: str, text: str) -> str:
        return f"{color}{text}{cls.ENDC}"

    @classmethod
    def success(cls, text: str) -> str:
        """Return text in green color."""
        return cls.paint(cls.OKGREEN, text)

    @classmethod
    def error(cls, text: str) -> str:
        """Return text in red color."""
        return cls.paint(cls.FAIL, text)

    @classmethod
    def warning(cls, text: str) -> str:
        """Return text in yellow color."""
        return cls.paint(cls.WARNING, text)

    @classmethod
    def info(cls, text: str) -> str:
        """Return text in cyan color."""
        return cls.paint(cls.OKCYAN, text)

    @classmethod
    def bold(cls, text: str) -> str:
        """Return text in bold."""
        return cls.paint(cls.BOLD, text)

    @classmethod
    def severity(cls, severity: str, text: str = None) -> str:
        """Color text (default: the severity itself) by issue severity."""
        return cls.paint(cls.SEVERITY_COLORS.get(severity, cls.ENDC), text or severity)

    @classmethod
    def status(cls, status: str, text: str = None) -> str:
        """Color text (default: the status itself) by issue status."""
        return cls.paint(cls.STATUS_COLORS.get(status, cls.ENDC), text or status)
