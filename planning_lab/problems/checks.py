from collections import deque

from ..core.errors import InvariantError


def sanity_check_problem(problem, max_states: int = 10_000, start=None):
    """Walks states breadth-first and checks every transition has a cost and its probabilities sum to 1."""
    if start is None:
        start = problem.initial_state()
    seen = set()
    q = deque([start])
    while q and len(seen) < max_states:
        s = q.popleft()
        if s in seen:
            continue
        seen.add(s)
        for a in problem.applicable_actions(s):
            outcomes = list(problem.resulting_states(a, s))
            if not outcomes:
                raise InvariantError(f"no resulting states for (s={s!r}, a={a!r})")
            total = 0.0
            for s2 in outcomes:
                t = problem.transition(a, s, s2)
                if t is None or t.cost is None:
                    raise InvariantError(f"transition cost is None for (s={s!r}, a={a!r}, s'={s2!r})")
                total += t.probability
                q.append(s2)
            if abs(total - 1.0) > 1e-9:
                raise InvariantError(f"probabilities for (s={s!r}, a={a!r}) sum to {total}")
    return f"OK: visited {len(seen)} states; no None costs."
