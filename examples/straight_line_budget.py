"""
Straight-line budget
====================

A neutral particle flies 10 mm in 1 mm steps. The path budget is enforced by
the propagator itself, so no user abort condition is needed. The second run
only allows 5 steps and therefore ends without end parameters.
"""

from trackprop import CurvilinearParameters, Options, make_propagator, units


def describe(res):
    if res.ok:
        return f"{res.stop_reason.name} after {res.steps} steps, end at {res.end_parameters.position.tolist()}"
    return f"{res.status.name} ({res.stop_reason.name}) after {res.steps} steps"


prop = make_propagator("straight_line")
start = CurvilinearParameters(position=[0, 0, 0], momentum=[1 * units.GeV, 0, 0], charge=0)

opts = Options(max_path_length=10 * units.mm, max_step_size=1 * units.mm)
print("full budget :", describe(prop.propagate(start, opts)))
print("5 steps only:", describe(prop.propagate(start, opts.replace(max_steps=5))))
