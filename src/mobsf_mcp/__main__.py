from mobsf_mcp.mcp.stdio_server import main

main()
