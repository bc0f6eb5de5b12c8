from pytest import Item, fixture

from termcalc.machine import Machine


@fixture
def machine():
    return Machine()


@fixture
def evaluate(machine):
    '''
    Evaluate a line on a fresh machine, keeping bindings across calls.
    '''
    return machine.evaluate


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Enabled by enable_assertion_pass_hook in pyproject.toml; see the output
    with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))
