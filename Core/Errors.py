# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Core/Errors.py
#  Purpose: Define the error taxonomy shared by the simulation components.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================


class Simulation_Error(Exception):
    pass


class ConfigurationError(Simulation_Error, ValueError):
    pass


class EmptyInputError(Simulation_Error, ValueError):
    pass


class PersistenceError(Simulation_Error, RuntimeError):
    pass


class DoubleRunError(Simulation_Error, RuntimeError):
    pass
