"""
devtoolsctl - Apollo Devtools operational CLI.
"""
