from typing import List
import pyqtgraph as pg

def setup_duration_plot(plot_widget: pg.PlotWidget, labels: List[str]):
    plot_widget.setBackground(None)
    plot_widget.showGrid(x=False, y=True, alpha=0.15)
    plot_widget.setMenuEnabled(False)
    plot_widget.setMouseEnabled(x=False, y=False)
    plot_widget.hideButtons()
    plot_widget.setLabel('left', 'Seconds')
    plot_widget.getAxis('bottom').setTicks([list(enumerate(labels))])
    bars = pg.BarGraphItem(x=list(range(len(labels))), height=[0] * len(labels), width=0.6)
    plot_widget.addItem(bars)
    return bars

def update_bars(bars, durations: List[int]):
    bars.setOpts(x=list(range(len(durations))), height=list(durations))
