import sys
import os
import requests
import time
from colorama import init, Fore, Style

# 引入测试数据
sys.path.append(os.path.dirname(os.path.abspath(__file__)))
from benchmark_data import BENCHMARK_CASES

init(autoreset=True)

API_URL = os.getenv("INTELLIGENCE_API_URL", "http://localhost:8000/api/intelligence/query")


def check_case(resp, case):
    """
    判定逻辑：状态码必须一致；指定了可视化类型时也必须一致
    """
    if resp.status_code != case["expected_status"]:
        return False
    expected_vis = case["expected_visualization"]
    if resp.status_code != 200 or not expected_vis:
        return True
    visualization = resp.json().get("visualization") or {}
    return visualization.get("type") == expected_vis


def run_benchmark():
    total = len(BENCHMARK_CASES)
    passed = 0
    results_by_type = {}

    print(f"{Fore.CYAN}🚀 Running intelligence benchmark ({total} cases) against {API_URL}")
    print("=" * 60)

    for idx, case in enumerate(BENCHMARK_CASES):
        query = case["q"]
        case_type = case["type"]

        if case_type not in results_by_type:
            results_by_type[case_type] = {"total": 0, "pass": 0}
        results_by_type[case_type]["total"] += 1

        print(f"Test [{idx + 1}/{total}] {case_type}: {query[:40]}...", end="", flush=True)

        try:
            start_time = time.time()
            resp = requests.post(API_URL, json={"question": query}, timeout=120)
            cost_time = time.time() - start_time

            if check_case(resp, case):
                print(f"{Fore.GREEN} [PASS] {Style.RESET_ALL} ({cost_time:.1f}s)")
                passed += 1
                results_by_type[case_type]["pass"] += 1
            else:
                print(f"{Fore.RED} [FAIL] {Style.RESET_ALL} HTTP {resp.status_code}")
                print(f"    ❌ Expected: {case['expected_status']} / {case['expected_visualization']}")
                print(f"    🔍 Server says: {resp.text[:300]}")

        except requests.RequestException as e:
            print(f"{Fore.RED} [EXCEPTION] {e}")

    # 打印最终报告
    accuracy = (passed / total) * 100
    print("\n" + "=" * 60)
    print(f"{Fore.YELLOW}🏆 Benchmark Report")
    print("=" * 60)
    print(f"Total Cases:  {total}")
    print(f"Passed:       {passed}")
    print(f"Failed:       {total - passed}")
    print(f"Overall Acc:  {Fore.GREEN}{accuracy:.2f}%")
    print("-" * 60)
    for c_type, stats in results_by_type.items():
        if stats["total"] > 0:
            type_acc = (stats["pass"] / stats["total"]) * 100
            print(f"  - {c_type:<20}: {stats['pass']}/{stats['total']} ({type_acc:.1f}%)")
    print("=" * 60)


if __name__ == "__main__":
    run_benchmark()
