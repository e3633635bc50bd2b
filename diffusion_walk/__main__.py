from diffusion_walk.cli import main

main()
