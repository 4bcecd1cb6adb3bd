"""Factory for creating annotators with registration-based pattern.

Supports the Open/Closed Principle - new annotators can be added
without modifying existing code by using the register decorator.
"""

from collections.abc import Callable
from typing import Any, TypeVar

from core.types import Feature

from .base import Annotator

# Type variable for annotator classes
T = TypeVar("T", bound=Annotator)


class AnnotatorRegistry:
    """Registry for annotator classes.

    Provides a central registration point for annotator implementations,
    keyed by the CLI mode name.

    Example:
        # Register a new annotator
        @AnnotatorRegistry.register("faces")
        class FaceAnnotator(Annotator):
            ...

        # Create an instance
        annotator = AnnotatorRegistry.create("logos")
    """

    _annotators: dict[str, type[Annotator]] = {}
    _default_kwargs: dict[str, dict[str, Any]] = {}

    @classmethod
    def register(
        cls,
        mode: str,
        **default_kwargs: Any,
    ) -> Callable[[type[T]], type[T]]:
        """Register an annotator class for a mode.

        Args:
            mode: Mode identifier (e.g., 'logos', 'document').
            **default_kwargs: Default keyword arguments for this annotator.

        Returns:
            Decorator function that registers the class.

        Raises:
            ValueError: If mode is already registered.
        """

        def decorator(annotator_class: type[T]) -> type[T]:
            if mode in cls._annotators:
                raise ValueError(f"Mode '{mode}' is already registered")
            cls._annotators[mode] = annotator_class
            cls._default_kwargs[mode] = default_kwargs
            return annotator_class

        return decorator

    @classmethod
    def create(cls, mode: str, **kwargs: Any) -> Annotator:
        """Create an annotator instance.

        Args:
            mode: Annotator mode (e.g., 'logos', 'document').
            **kwargs: Arguments passed to the annotator constructor,
                overriding the registered defaults.

        Returns:
            Configured Annotator instance.

        Raises:
            ValueError: If mode is not registered.
        """
        annotator_class = cls.get_annotator_class(mode)
        merged_kwargs = {**cls._default_kwargs.get(mode, {}), **kwargs}
        return annotator_class(**merged_kwargs)

    @classmethod
    def list_modes(cls) -> list[str]:
        """Return list of registered modes."""
        return list(cls._annotators.keys())

    @classmethod
    def get_annotator_class(cls, mode: str) -> type[Annotator]:
        """Get the annotator class for a mode.

        Raises:
            ValueError: If mode is not registered.
        """
        if mode not in cls._annotators:
            valid = ", ".join(cls._annotators.keys())
            raise ValueError(f"Unknown mode: {mode}. Valid modes: {valid}")
        return cls._annotators[mode]


# Register built-in annotators
# Import here to avoid circular imports
from .document_annotator import DocumentTextAnnotator  # noqa: E402
from .image_annotator import ImageAnnotator  # noqa: E402

AnnotatorRegistry._annotators["logos"] = ImageAnnotator
AnnotatorRegistry._annotators["text"] = ImageAnnotator
AnnotatorRegistry._annotators["properties"] = ImageAnnotator
AnnotatorRegistry._annotators["document"] = DocumentTextAnnotator
AnnotatorRegistry._default_kwargs["logos"] = {"feature": Feature.LOGO}
AnnotatorRegistry._default_kwargs["text"] = {"feature": Feature.TEXT}
AnnotatorRegistry._default_kwargs["properties"] = {"feature": Feature.IMAGE_PROPERTIES}
AnnotatorRegistry._default_kwargs["document"] = {}
