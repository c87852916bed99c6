"""Output formats for each supported CI/CD tool.

Every tool writes one line per variable. The lines are shell or pipeline
logging commands that the calling pipeline sources after the plugin runs,
so they are reproduced byte for byte, including the quote escaping used by
the circleci and teamcity formats.
"""

from dataclasses import dataclass
from enum import Enum


class Tool(str, Enum):
    """Supported CI/CD tools."""

    GITHUB = "github"
    AZURE_DEVOPS = "azure-devops"
    BAMBOO = "bamboo"
    BITBUCKET = "bitbucket"
    CIRCLECI = "circleci"
    TEAMCITY = "teamcity"
    LINUX = "linux"


@dataclass(frozen=True)
class FormatTemplate:
    """Per-variable line template for a tool."""

    tool: Tool
    pattern: str

    def render(self, name: str, value: str) -> str:
        """Render the line for one variable, including the trailing newline."""
        return self.pattern.format(name=name, value=value)


TEMPLATES: dict[Tool, FormatTemplate] = {
    template.tool: template
    for template in (
        FormatTemplate(Tool.GITHUB, "echo '{name}={value}' >> $GITHUB_ENV\n"),
        FormatTemplate(
            Tool.AZURE_DEVOPS,
            "echo '##vso[task.setvariable variable={name};issecret=true;]{value}'\n",
        ),
        FormatTemplate(Tool.BAMBOO, "({name})=(.[{value}])\n"),
        FormatTemplate(Tool.BITBUCKET, 'export ({name})="(.[{value}])"\n'),
        FormatTemplate(
            Tool.CIRCLECI,
            "echo '\"'\"'export ({name})=\"(.[{value}])\"'\"'\"' >> $BASH_ENV\n",
        ),
        FormatTemplate(
            Tool.TEAMCITY,
            "echo '\"'\"'##teamcity[setParameter name=\"({name})\" "
            "value=\"(.[{value}])\"]'\"'\"'\"\n",
        ),
        FormatTemplate(Tool.LINUX, "declare -x {name}='{value}'\n"),
    )
}

_missing = set(Tool) - set(TEMPLATES)
if _missing:
    raise RuntimeError(f"No output template for: {sorted(t.value for t in _missing)}")


def valid_tools() -> list[str]:
    """Tool identifiers in declaration order."""
    return [tool.value for tool in Tool]


def get_template(tool: Tool) -> FormatTemplate:
    return TEMPLATES[tool]
