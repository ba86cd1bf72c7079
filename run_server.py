"""
Start the storefront backend locally with auto-reload.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Storefront Backend")
    print("=" * 60)
    print()
    print("API Endpoints:")
    print("   - Health Check:     GET  http://localhost:8000/health")
    print("   - Recommendations:  POST http://localhost:8000/api/recommendations")
    print("   - Widget products:  POST http://localhost:8000/api/recommendations/products")
    print("   - Bundles:          GET  http://localhost:8000/bundles")
    print("   - Bundle detail:    GET  http://localhost:8000/bundles/{handle}")
    print("   - API Docs:              http://localhost:8000/docs")
    print()
    print("Test with curl:")
    print('   curl -X POST "http://localhost:8000/api/recommendations" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"availableProducts": [{"id": "1", "title": "Red Shirt", "handle": "red-shirt"}]}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "storefront.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
