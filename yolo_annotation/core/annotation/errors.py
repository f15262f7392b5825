"""
Error taxonomy for annotation sessions.

Startup errors abort before a session exists and carry the process exit
code. Everything else is recoverable and is absorbed by the session.
"""

from gettext import gettext as _


class AnnotationError(Exception):
    """Base class for every error raised by the annotation core."""


class StartupError(AnnotationError):
    """Error that prevents a session from starting."""

    exit_code = 1


class EmptyCatalog(StartupError):
    exit_code = 2

    def __init__(self, directory):
        self.directory = directory
        super().__init__(
            _("No images found in the specified directory: {directory}").format(
                directory=directory
            )
        )


class DirectoryUnreadable(StartupError):
    exit_code = 3

    def __init__(self, directory, reason=None):
        self.directory = directory
        self.reason = reason
        message = _("Image directory is unreadable: {directory}").format(
            directory=directory
        )
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class EmptyClassList(StartupError):
    exit_code = 4

    def __init__(self, classes_file):
        self.classes_file = classes_file
        super().__init__(
            _("No classes loaded from classes file: {path}").format(path=classes_file)
        )


class ClassFileUnreadable(StartupError):
    exit_code = 4

    def __init__(self, classes_file, reason=None):
        self.classes_file = classes_file
        self.reason = reason
        message = _("No classes loaded, classes file is unreadable: {path}").format(
            path=classes_file
        )
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ImageDecodeFailure(AnnotationError):
    def __init__(self, image_path):
        self.image_path = image_path
        super().__init__(
            _("Could not load image {path}").format(path=image_path)
        )


class IndexOutOfRange(AnnotationError):
    def __init__(self, index, size):
        self.index = index
        self.size = size
        super().__init__(
            _("Invalid index {index}. Please specify an index between 1 and {size}").format(
                index=index, size=size
            )
        )


class AnnotationWriteFailure(AnnotationError):
    def __init__(self, label_path, reason=None):
        self.label_path = label_path
        self.reason = reason
        message = _("Could not write annotation file {path}").format(path=label_path)
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
