"""Jinja2-based synthesizer producing C# stub classes.

The template receives the batch model as-is: ``usings`` and ``classes``.
Argument projections are read from the method models, which derive them
from the structured parameter list on access.
"""

from jinja2 import Environment, PackageLoader, StrictUndefined

from refitgen.models import TemplateInformation

_TEMPLATE_PACKAGE = "refitgen"
_TEMPLATE_DIR = "templates"
DEFAULT_TEMPLATE = "refit_stubs.cs.j2"


def create_environment() -> Environment:
    """Create the Jinja2 environment for the packaged templates.

    Output is C#, so autoescaping is disabled. Undefined variables raise
    instead of rendering as empty text.
    """
    return Environment(
        loader=PackageLoader(_TEMPLATE_PACKAGE, _TEMPLATE_DIR),
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


class JinjaSynthesizer:
    """Renders stub implementations through a Jinja2 template."""

    def __init__(
        self,
        template_name: str = DEFAULT_TEMPLATE,
        environment: Environment | None = None,
    ) -> None:
        """Initialise with a template name and an optional custom environment.

        Args:
            template_name: Template to render, resolved by the environment loader
            environment: Environment to use instead of the packaged one

        """
        self._environment = environment or create_environment()
        self._template_name = template_name

    @property
    def name(self) -> str:
        """Return the canonical synthesizer name."""
        return "jinja"

    def synthesize(self, info: TemplateInformation) -> str:
        """Render generated source for the batch model."""
        template = self._environment.get_template(self._template_name)
        return template.render(usings=info.usings, classes=info.classes)
