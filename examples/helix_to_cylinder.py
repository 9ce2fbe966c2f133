"""
Helix to cylinder
=================

A 1 GeV muon in a 2 T solenoid field is propagated with the RK4 stepper to a
barrel layer at r = 500 mm. A SteppingLogger records every step and a
MaterialInteractor accumulates silicon along the way; the trace is plotted
in the transverse plane.

Set jit=True to compile the RK4 kernel with numba (falls back with a
warning when numba is not installed).
"""

from trackprop import (
    ActionList, ConstantField, CurvilinearParameters, CylinderSurface, Options, make_propagator, units,
)
from trackprop.actions import MaterialInteraction, MaterialInteractor, SteppingLogger, StepTrace
from trackprop.material import Material
from trackprop.plot import export, trace

silicon = Material(x0=93.7 * units.mm, l0=465.2 * units.mm, a=28.0855, z=14, rho=2.329 * units.g_per_cm3)

prop = make_propagator("rk4", field=ConstantField([0, 0, 2 * units.T]), jit=False)
start = CurvilinearParameters(
    position=[0, 0, 0],
    momentum=[0.8 * units.GeV, 0.6 * units.GeV, 0.1 * units.GeV],
    charge=-1,
)
barrel = CylinderSurface(500 * units.mm, identifier=1)

opts = Options(
    max_step_size=20 * units.mm,
    action_list=ActionList(SteppingLogger(), MaterialInteractor(silicon)),
)
res = prop.propagate(start, opts, target=barrel)

material = res[MaterialInteraction]
print(res)
print(f"reached surface {res.end_parameters.surface.identifier} at local {res.end_parameters.local_position}")
print(f"x/X0 = {material.thickness_in_x0:.3f}, sigma_theta = {material.sigma_theta * 1e3:.2f} mrad")

ax = trace.xy(res[StepTrace], label="mu-, 1 GeV", title="RK4 in 2 T")
trace.surface(ax, barrel)
export.show()
