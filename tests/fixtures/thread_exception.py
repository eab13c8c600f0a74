import threading

from just_test import test


def body(t):
    worker = threading.Thread(target=lambda: 1 / 0)
    worker.start()
    worker.join()
    t.pass_("after the thread")


test("thread fault", body)
