import pandas as pd
import pytest


@pytest.fixture
def abc_table():
    # A and B are affine copies; C is free text
    return pd.DataFrame(
        {
            "A": [1, 2, 3],
            "B": [10, 20, 30],
            "C": ["x", "y", "z"],
        }
    )


@pytest.fixture
def mixed_table():
    return pd.DataFrame(
        {
            "num": [1.0, 2.0, 3.0, 4.0, 5.0, 6.0],
            "num_scaled": [-2.0, -5.0, -8.0, -11.0, -14.0, -17.0],
            "noise": [0.3, -1.2, 0.8, 0.1, 2.2, -0.7],
            "grade": pd.Categorical(["lo", "hi", "lo", "mid", "hi", "mid"]),
            "grade_txt": ["L", "H", "L", "M", "H", "M"],
            "pair": ["p", "q", "p", "q", "p", "q"],
        }
    )
