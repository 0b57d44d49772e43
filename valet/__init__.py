"""
valet — Exit-gate prediction and car dispatch
=============================================

Modules
-------
session
    :class:`ValetSession` state owner and command surface.
policy
    :class:`ValetPolicy` tunable constants.
movement
    Per-tick pedestrian stepping, wall reflection and dwell tracking.
scoring
    Gate confidence from proximity, heading and dwell.
dispatch
    :class:`DispatchController` trigger / sustain / redirect state machine.
beacons
    Simulated beacon signal strengths.
events
    :class:`EventLog` newest-first activity log.
ticker
    :class:`ThreadTicker` and :class:`ManualTicker` drivers.
geometry
    Distance and angle helpers.
api
    Optional FastAPI surface.
"""
