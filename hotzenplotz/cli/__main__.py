"""Allow ``python -m hotzenplotz.cli`` execution."""

from hotzenplotz.cli.manage import main

main()
