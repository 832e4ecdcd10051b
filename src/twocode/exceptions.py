class TwoCodeError(Exception):
    """
    Base class for errors raised while producing twocode output.

    Errors of this family are fatal to a single operation (one tree print or one
    content log) but never to the interactive session, which reports them and
    keeps running.
    """

    pass


class OutputDirectoryError(TwoCodeError):
    """
    Exception raised when the output folder for a content log cannot be created.

    Attributes:
        path (str): Path of the folder that could not be created.
        reason (str): Description of the underlying failure.

    Example:
        >>> error = OutputDirectoryError("/read-only/contents", "Permission denied")
        >>> str(error)
        'Unable to create output folder /read-only/contents: Permission denied'
    """

    def __init__(self, path: str, reason: str) -> None:
        """
        Initialize the exception with the folder path and failure reason.

        Args:
            path (str): Path of the folder that could not be created.
            reason (str): Description of the underlying failure.
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to create output folder {path}: {reason}")


class OutputFileError(TwoCodeError):
    """
    Exception raised when the content log file cannot be opened for writing.

    Attributes:
        path (str): Path of the log file that could not be opened.
        reason (str): Description of the underlying failure.

    Example:
        >>> error = OutputFileError("/tmp/contents/log.txt", "Disk full")
        >>> str(error)
        'Unable to open /tmp/contents/log.txt: Disk full'
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to open {path}: {reason}")
