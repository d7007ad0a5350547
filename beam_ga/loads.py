"""
Fixed external load case for the beam search.

Two engines hang from the beam at fixed stations, fuel and lift act as
distributed loads, and the beam carries its own weight. Differential engine
thrust (exit minus inlet velocity times mass flow) produces a horizontal
couple about the weak axis.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LoadCase:
    """
    External loads applied to every candidate beam.

    Parameters:
    -----------
    engine_load : float
        Concentrated load of each engine (lb)
    engine_station_1, engine_station_2 : float
        Distance of each engine from the reference end (in)
    inlet_velocity, exit_velocity : float
        Engine flow velocities; thrust = (exit - inlet) × mass_flow
    mass_flow : float
        Engine mass flow rate
    fuel_load : float
        Distributed fuel load (lb/in)
    lift_load : float
        Distributed lift load (lb/in)
    """
    engine_load: float = 16000.0
    engine_station_1: float = 501.0
    engine_station_2: float = 879.0
    inlet_velocity: float = 800.0
    exit_velocity: float = 1400.0
    mass_flow: float = 30.0
    fuel_load: float = 252.0
    lift_load: float = 720.0

    @property
    def thrust(self) -> float:
        """Thrust per engine."""
        return (self.exit_velocity - self.inlet_velocity) * self.mass_flow


DEFAULT_LOAD_CASE = LoadCase()
