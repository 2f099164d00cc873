"""Code generation error types."""


class CodeGenerationError(Exception):
    """Base error for the generation engine."""


class UnbalancedBlockError(CodeGenerationError):
    """open_block/close_block calls did not pair up.

    Always an emitter bug, never a user-input problem.
    """

    def __init__(self, message: str, depth: int) -> None:
        super().__init__(message)
        self.depth = depth


class BlueprintLoadError(CodeGenerationError):
    """A persisted blueprint document could not be read into a snapshot."""
