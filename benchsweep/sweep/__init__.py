"""benchsweep.sweep

Sweep pipeline:
- generator: SweepConfig -> SweepPoints, in input order
- overrides: SweepPoint -> CliTokens | StructuredPatch
- writer: one summary row per completed run
- driver: the strictly sequential loop tying them together
"""
