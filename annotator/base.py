"""Abstract base class for Vision annotators."""

from abc import ABC, abstractmethod

from core.types import AnalysisRequest, AnalysisResponse, Feature


class Annotator(ABC):
    """Abstract base class for Vision annotators.

    Implements the Template Method pattern - subclasses implement
    the actual service call while the base class defines the
    interface contract.

    Subclasses must implement:
        - name: Human-readable name of the annotator
        - feature: Feature requested from the service
        - annotate: Submit a request and convert the response

    Example:
        class MyAnnotator(Annotator):
            @property
            def name(self) -> str:
                return "My Custom Annotator"

            @property
            def feature(self) -> Feature:
                return Feature.LOGO

            def annotate(self, request) -> AnalysisResponse:
                return AnalysisResponse(feature=self.feature)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the annotator."""
        ...

    @property
    @abstractmethod
    def feature(self) -> Feature:
        """Feature requested from the annotation service."""
        ...

    @abstractmethod
    def annotate(self, request: AnalysisRequest) -> AnalysisResponse:
        """Submit a request and return the converted response.

        Args:
            request: Request built by core.request_builder.build_request.

        Returns:
            AnalysisResponse holding either the payload or the
            service-reported error.
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
