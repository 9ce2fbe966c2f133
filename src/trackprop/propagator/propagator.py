# src/trackprop/propagator/propagator.py
"""
Propagator: high-level steering of one propagation.

The stepper does the numerics; the propagator owns the step loop, runs the
configured actions, evaluates the user abort conditions followed by the
mandatory internal ones, and turns the final cache into public parameters.

Outcome summary (Result.status / Result.stop_reason):
  - internal abort satisfied before the first step -> FAILURE / DEGENERATE_START
  - target surface behind the start                -> WRONG_DIRECTION / WRONG_DIRECTION
  - stepper flags a numerical failure              -> FAILURE / STEPPER_FAILURE
  - a user or internal abort fires                 -> SUCCESS / what fired
  - max_steps exhausted                            -> IN_PROGRESS / MAX_STEPS
End parameters are set only for SUCCESS.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from trackprop.errors import StepperCapabilityError
from trackprop.propagator.aborters import PathLimitReached, SurfaceReached
from trackprop.propagator.lists import AbortList
from trackprop.propagator.options import Options
from trackprop.propagator.result import Result
from trackprop.propagator.status import OK, Status, StopReason

if TYPE_CHECKING:
    from trackprop.steppers.base import StepperCache, StepperSpec

__all__ = ["Propagator"]

_REQUIRED_METHODS = ("make_cache", "step", "convert", "convert_to_surface", "return_parameter_type")


def _check_stepper(stepper: Any) -> None:
    meta = getattr(stepper, "meta", None)
    name = getattr(meta, "name", type(stepper).__name__)
    missing = []
    if meta is None:
        missing.append("meta: StepperMeta")
    for method in _REQUIRED_METHODS:
        if not callable(getattr(stepper, method, None)):
            missing.append(f"method {method}()")
    return_types = getattr(meta, "return_types", ()) if meta is not None else ()
    if meta is not None and not return_types:
        missing.append("meta.return_types (public parameter types it produces)")
    for rtype in return_types:
        if not callable(getattr(rtype, "copy", None)):
            missing.append(f"return type {getattr(rtype, '__name__', rtype)!s} must be copyable (define copy())")
    if missing:
        raise StepperCapabilityError(name, missing)


class Propagator:
    """
    Propagates track parameters with a stepper until an abort condition fires
    or the step budget runs out.

    Example:
        >>> from trackprop import Options, Propagator, CurvilinearParameters
        >>> from trackprop.steppers import StraightLineStepper
        >>> prop = Propagator(StraightLineStepper())
        >>> start = CurvilinearParameters(position=[0, 0, 0], momentum=[1, 0, 0])
        >>> result = prop.propagate(start, Options(max_path_length=10.0, max_step_size=1.0))
        >>> result.steps, result.path_length
        (10, 10.0)
    """

    def __init__(self, stepper: StepperSpec):
        _check_stepper(stepper)
        self._stepper = stepper

    @property
    def stepper(self) -> StepperSpec:
        return self._stepper

    # ------------------------------------------------------------------ loop

    def _propagate_loop(
        self,
        result: Result,
        cache: StepperCache,
        options: Options,
        internal_stop_conditions: AbortList,
    ) -> Status:
        """
        Step until a stop condition fires or ``options.max_steps`` is used up.

        Returns IN_PROGRESS when the loop ended through a stop condition or the
        step budget (``result.stop_reason`` tells which), FAILURE otherwise.
        """
        if internal_stop_conditions(result, cache):
            result.stop_reason = StopReason.DEGENERATE_START
            return Status.FAILURE

        stepper = self._stepper
        actions = options.action_list
        stop_conditions = options.stop_conditions
        while result.steps < options.max_steps:
            result.path_length += stepper.step(cache)
            if cache.status != OK:
                # count the failed step
                result.steps += 1
                result.stop_reason = StopReason.STEPPER_FAILURE
                return Status.FAILURE

            actions(cache, result)

            # both lists are evaluated every step, user list first
            user_hit = stop_conditions.first_fired(result, cache)
            internal_hit = internal_stop_conditions.first_fired(result, cache)
            if user_hit is not None or internal_hit is not None:
                # break condition triggered, but still count the step
                result.steps += 1
                if internal_hit is not None:
                    result.stop_reason = internal_hit.reason
                else:
                    result.stop_reason = StopReason.USER_ABORT
                if user_hit is not None:
                    result.aborted_by = getattr(user_hit, "__name__", type(user_hit).__name__)
                return Status.IN_PROGRESS
            result.steps += 1

        result.stop_reason = StopReason.MAX_STEPS
        return Status.IN_PROGRESS

    # ------------------------------------------------------------ entry points

    def propagate(self, start: Any, options: Optional[Options] = None, *, target: Any = None) -> Result:
        """
        Propagate ``start`` according to ``options``.

        Without ``target`` the propagation runs until a user abort fires or the
        path budget is used up, and the end parameters are curvilinear. With a
        ``target`` surface it additionally stops on the surface and the end
        parameters are bound to it. The surface is borrowed for the duration
        of the call.

        "Did not arrive" is never an exception: inspect ``result.status`` and
        ``result.stop_reason``.
        """
        if options is None:
            options = Options()
        if target is None:
            return self._propagate_free(start, options)
        return self._propagate_to_surface(start, target, options)

    def _propagate_free(self, start: Any, options: Options) -> Result:
        stepper = self._stepper
        result = Result(Status.IN_PROGRESS, options.action_list.result_types)

        cache = stepper.make_cache(start)
        cache.step_size = options.signed_step_size

        internal = AbortList(
            PathLimitReached(
                signed_path_limit=options.signed_path_limit,
                tolerance=options.target_tolerance,
            )
        )

        status = self._propagate_loop(result, cache, options, internal)
        self._finish(result, status, lambda: stepper.convert(cache))
        return result

    def _propagate_to_surface(self, start: Any, target: Any, options: Options) -> Result:
        stepper = self._stepper
        cache = stepper.make_cache(start, options.signed_step_size)
        result = Result(Status.IN_PROGRESS, options.action_list.result_types)

        target_reached = SurfaceReached(
            surface=target,
            direction=options.direction,
            tolerance=options.target_tolerance,
        )
        internal = AbortList(
            target_reached,
            PathLimitReached(
                signed_path_limit=options.signed_path_limit,
                tolerance=options.target_tolerance,
            ),
        )

        if target_reached.target_behind(cache):
            result.status = Status.WRONG_DIRECTION
            result.stop_reason = StopReason.WRONG_DIRECTION
            return result

        status = self._propagate_loop(result, cache, options, internal)
        self._finish(result, status, lambda: stepper.convert_to_surface(cache, target))
        return result

    @staticmethod
    def _finish(result: Result, status: Status, convert) -> None:
        if status == Status.IN_PROGRESS and result.stop_reason != StopReason.MAX_STEPS:
            result.end_parameters = convert()
            result.status = Status.SUCCESS
        else:
            result.status = status
