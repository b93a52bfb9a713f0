"""CareerMatch agent core: tool-calling loop with fact and vector memory."""

__version__ = "0.1.0"
