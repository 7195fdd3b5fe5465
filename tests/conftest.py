from typing import Iterator

import pytest

from expect_changes.utils import formatting


@pytest.fixture(autouse=True)
def reset_formatting() -> Iterator[None]:
    yield
    formatting.reset_formatting()
