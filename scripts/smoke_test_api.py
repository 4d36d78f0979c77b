import sys

import httpx

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:3000"


def main() -> None:
    with httpx.Client(base_url=BASE_URL, timeout=10.0) as client:
        health = client.get("/health")
        print(f"health status={health.status_code} body={health.json()}")

        for term in ["Toyota", "manguera", "sensr oxigeno"]:
            response = client.get("/api/search", params={"q": term, "limit": 3})
            data = response.json().get("data", {})
            print(f"query={term} status={response.status_code} total={data.get('total')} time={data.get('searchTime')}")
            for item in data.get("results", [])[:3]:
                print(f"- {item['producto_id']} | {item['marca_vehiculo']} | {item['descripcion_corta']} | score={item['score']:.3f}")
            print("---")

        response = client.get("/api/search/year-range", params={"q": "Toyota", "year": 2012})
        print(f"year-range status={response.status_code} total={response.json()['data']['total']}")


if __name__ == "__main__":
    main()
