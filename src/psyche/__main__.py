from psyche.main import main

main()
