from backend.engine.gametimer.timer import ClockTicker, ManualTicker, Ticker

__all__ = ["ClockTicker", "ManualTicker", "Ticker"]
