import queue
from typing import List

from LOGSCOPE.log_analysis import alert


class AlertManager:
    def __init__(self, alert_queue=None):
        self.__alert_queue = alert_queue if alert_queue is not None else alert.alert_queue

    @property
    def number_of_alerts(self) -> int:
        return self.__alert_queue.qsize()

    def add_alert(self, new_alert: alert.Alert):
        try:
            self.__alert_queue.put_nowait(new_alert)
        except queue.Full:
            alert.logger.warning("Alert queue is full, dropping alert: %s", new_alert.message)

    def view_current_alert(self):
        try:
            alert_data = self.__alert_queue.get_nowait()
        except queue.Empty:
            print("No Alerts currently")
            return
        print(f"{alert_data.timestamp} \n alert_level:{alert_data.alertLevel} \n {alert_data.message} \n\n {alert_data.detected_by}")

    def drain(self) -> List[alert.Alert]:
        """Remove and return every queued alert, oldest first"""
        alerts = []
        while True:
            try:
                alerts.append(self.__alert_queue.get_nowait())
            except queue.Empty:
                return alerts

    def empty_queue(self):
        self.drain()
