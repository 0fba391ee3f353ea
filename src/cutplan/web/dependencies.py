"""FastAPI dependency injection for planning services."""

from typing import Annotated

from fastapi import Depends

from cutplan.application.commands import PlanCutsCommand


def get_plan_command() -> PlanCutsCommand:
    """Dependency for PlanCutsCommand."""
    return PlanCutsCommand()


PlanCommandDep = Annotated[PlanCutsCommand, Depends(get_plan_command)]
