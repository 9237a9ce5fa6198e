"""
control - Signal arbitration and timing core
============================================

Modules
-------
policy
    :class:`SignalPolicy` tunable constants.
density
    Tagged per-road density readings and their derivation.
state
    :class:`Road` and :class:`ControllerState` immutable context.
scorer
    Stateless right-of-way scoring and selection.
engine
    Pure :func:`step` transition function and its events.
ticker
    :class:`ThreadTicker` / :class:`ManualTicker` periodic schedulers.
analytics
    :class:`DensityHistory` bounded sample window.
controller
    :class:`SignalController` lock-owning orchestrator.
"""
