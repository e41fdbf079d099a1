"""Reference solutions to a selection of the exercises, written as plain Python."""