"""inekoalaty: simulation and power-law analysis of the Alice/Bazza game."""
