import sys

from . import main

main(["python -m goverter", *sys.argv[1:]])
