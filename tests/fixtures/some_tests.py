# Canonical example script: every assertion once passing, once failing.
# Expected: 14 assertions, 7 pass, 7 fail, exit code 1.

from just_test import test


def ok_checks(t):
    t.ok(False, "false cannot be okay, okay")
    t.ok(True, "true should be okay")


def not_ok_checks(t):
    t.not_ok(False, "false is not okay")
    t.not_ok(True, "true is okay")


def _raise_aww_yea():
    raise Exception("Aww yea")


def throws_checks(t):
    t.throws(lambda: True, "Exception", "you should have thrown an exception bruv")
    t.throws(_raise_aww_yea, "Exception", "there you go")


def does_not_throw_checks(t):
    t.does_not_throw(lambda: True, "looks good")
    t.does_not_throw(_raise_aww_yea, "you shouldn't have thrown an exception mate")


def equals_checks(t):
    t.equals(1, 1, "should be good")
    t.equals(0, 1, "should fail")


def not_equals_checks(t):
    t.not_equals(0, 1, "should be good")
    t.not_equals(1, 1, "should fail")


test("ok does the proper checks", ok_checks)
test("pass lets the test pass", lambda t: t.pass_("all good"))
test("fail actually fails", lambda t: t.fail("such a good fail"))
test("notOk checks for falsey", not_ok_checks)
test("throws looks for exceptions", throws_checks)
test("doesNotThrow should check exceptions are not thrown", does_not_throw_checks)
test("equals", equals_checks)
test("not equals", not_equals_checks)
