import warnings

from just_test import test


def body(t):
    t.pass_("before the warning")
    warnings.warn("disk almost full", RuntimeWarning)
    t.pass_("never reached")


test("warning mid-group", body)
test("never reached either", lambda t: t.pass_("unreachable"))
