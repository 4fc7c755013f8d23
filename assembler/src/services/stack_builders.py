"""
Stack builder contract and stock implementations.

A stack builder materializes the resources of one stage. It receives the
stage handle plus the stage's target account and region, and must add its
stacks through ``scope.add_stack``: only stacks held by the handle are
deployed. The return value is not read by the assembler.
"""

from typing import Callable, Iterable, List

from assembler.src.models.pipeline import StackDeployment, StageScope

StackBuilder = Callable[[StageScope, str, str], List[StackDeployment]]

def static_stack_builder(stack_names: Iterable[str]) -> StackBuilder:
    """Builder that adds the same named stacks to every stage."""
    names = list(stack_names)

    def build(scope: StageScope, account: str, region: str) -> List[StackDeployment]:
        return [scope.add_stack(f"{scope.name}-{name}") for name in names]

    return build