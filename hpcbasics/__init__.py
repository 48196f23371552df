"""Teaching tools for high-performance computing basics: byte layouts, call chains, argument listing, heat-diffusion stencils, domain decomposition and spiral-ordered seeds."""

__version__ = "0.1.0"

__all__ = ["arguments", "binrepr", "callchain", "decomposition", "grid", "serial", "spiral"]