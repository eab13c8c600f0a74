# just_test/__main__.py
# python -m just_test script.py [script.py ...]

from just_test.run_tests import main

main()
