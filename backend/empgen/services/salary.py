import random

DEFAULT_MIN_SALARY = 400000
DEFAULT_MAX_SALARY = 5000000


def random_salary(min_salary: int = DEFAULT_MIN_SALARY, max_salary: int = DEFAULT_MAX_SALARY) -> int:
    """Return a uniformly distributed integer in [min_salary, max_salary], both ends inclusive."""
    if min_salary > max_salary:
        raise ValueError(f"min_salary ({min_salary}) must not exceed max_salary ({max_salary})")
    return random.randint(min_salary, max_salary)
