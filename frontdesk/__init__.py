"""Front-desk portal: patient records and appointment booking for a clinic."""

__version__ = "1.0.0"
