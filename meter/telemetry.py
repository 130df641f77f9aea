def format_telemetry(sample: int, volts: float, frequency: int) -> str:
    """Telemetry line read by plotting tools. Field names and precision are fixed."""
    return (
        f"ADC:{sample},"
        f"Voltage:{volts:.4f},"
        f"Voltage_mV:{volts * 1000:.2f},"
        f"Frequency:{frequency}"
    )
