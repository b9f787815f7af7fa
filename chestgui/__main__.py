from chestgui.cli import main

main()
