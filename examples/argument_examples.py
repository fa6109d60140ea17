from enum import Enum
from typing import Annotated, Literal

from pydantic import Field

from argvet import Option, Positional, parser
from argvet.logger import logging_trace
from argvet.utils import setup_logging


class Place(Enum):
    """Enum for different places."""

    NEW_YORK = "New York"
    SAN_FRANCISCO = "San Francisco"
    LONDON = "London"

    def __str__(self):
        return self.value


def check_replicas(parsed: dict) -> bool | str:
    if parsed["dry_run"] and parsed["replicas"] > 1:
        return "--dry_run only supports a single replica"
    return True


cli = (
    parser()
    .name("deploy")
    .version("1.0.0")
    .description("Deploy a service")
    .options(
        {
            "place": Option(Place, alias="p", default=Place.NEW_YORK),
            "region": Option(str, description="Cloud region", default="us-east-1"),
            "tag": Option(str | None, alias="t", arg_name="TAG"),
            "replicas": Option(Annotated[int, Field(ge=1, description="Replica count")], default=1),
            "level": Option(Literal["debug", "info", "warning"], default="info"),
            "numbers": Option(list[int] | None, alias="n"),
            "dry_run": Option(bool, default=False),
        }
    )
    .args([Positional("service", str), Positional("paths", list[str] | None)])
    .validation(check_replicas)
)

if __name__ == "__main__":
    setup_logging()
    parsed = cli.trace(logging_trace).parse()
    tag = parsed["tag"] or "latest"
    numbers = "|".join(str(number) for number in parsed["numbers"] or [])
    print(
        f"{parsed['service']}:{tag}:{numbers} deployed to {parsed['region']} "
        f"at {parsed['place']} ({parsed['replicas']} replicas)."
    )
